from dataclasses import dataclass


@dataclass
class User:
    """Domain model representing a user account record."""
    id: str
    name: str
    email: str
