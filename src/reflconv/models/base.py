"""
Base model for converter data structures.
"""

from pydantic import BaseModel, ConfigDict


class ReflconvModel(BaseModel):
    """
    Base model for all converter models.

    Provides:
    - numpy arrays as field values
    - validation on assignment
    - dict/JSON helpers
    """

    model_config = ConfigDict(
        # Allow numpy arrays
        arbitrary_types_allowed=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Validate on assignment
        validate_assignment=True,
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json(exclude_none=True)
