"""Catalog API: product and category CRUD with image upload to S3."""
