"""Flowershop catalog service.

Store-scoped catalog of flowers and the bouquets, baskets and packages
built out of them.
"""

__version__ = "0.1.0"
