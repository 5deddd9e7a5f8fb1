"""Storefront backend: catalogue browsing, checkout, reviews, wishlist and leads."""
