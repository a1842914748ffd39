"""Domain services over the MongoDB collections."""
