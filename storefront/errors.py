"""
Common Error Constants

Centralized log and error messages for the cart subsystem.
"""

# Persistence
ERROR_CART_LOAD_FAILED = "Failed to load cart"
ERROR_CART_CORRUPTED = "Corrupted cart data"
ERROR_CART_SAVE_FAILED = "Failed to save cart"
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"

# Mutations
ERROR_INVALID_PRODUCT = "Invalid product record"
ERROR_INVALID_QUANTITY = "Invalid quantity"
ERROR_ITEM_NOT_IN_CART = "Item not in cart"

# Notification
ERROR_PENDING_MUTATIONS_DROPPED = "Pending cart mutations dropped after subscriber failure"

# Catalog
ERROR_CATALOG_LOAD_FAILED = "Failed to load catalog"
