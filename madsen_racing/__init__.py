"""Madsen Racing: Contentful content layer for madsenracing.dk."""
