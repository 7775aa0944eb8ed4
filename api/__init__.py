"""
FastAPI RESTful API for the Bookshelf service.

This module provides the HTTP surface for:
- Adding books to the shelf
- Listing, filtering and reading books
- Updating and deleting books
"""
