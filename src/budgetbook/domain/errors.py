"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def group_not_found(group_id: int) -> str:
    """Return message for missing category group."""
    return f"Group {group_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def category_exists(name: str) -> str:
    """Return message for duplicate category name."""
    return f"A category named '{name}' already exists"


def group_exists(name: str) -> str:
    """Return message for duplicate group name."""
    return f"A group named '{name}' already exists"


def category_delete_blocked(name: str, transaction_count: int) -> str:
    """Return message when a category still has transactions."""
    return (
        f"Cannot delete category '{name}': it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Remove or reassign them first."
    )
