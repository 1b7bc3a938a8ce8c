"""Storefront service: catalog, cart, checkout, orders, wishlist and reviews."""
