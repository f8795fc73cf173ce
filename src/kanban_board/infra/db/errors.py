class StorageError(Exception):
    """Key-value backend could not read or write a record."""
