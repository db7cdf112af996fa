"""Apartments app package.

This app holds the apartment catalog: per-apartment metadata such as
price per night and guest capacity, amenities and the photo gallery.
The booking engine reads prices and capacities from here.
"""
