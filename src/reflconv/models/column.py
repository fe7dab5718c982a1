"""
Output column model.
"""

from pydantic import Field, field_validator

from reflconv.models.base import ReflconvModel


class OutputColumn(ReflconvModel):
    """
    One column of the output dataset.

    Attributes:
        label: MTZ column label (e.g. 'IMEAN', 'FreeR_flag')
        type_code: MTZ column type, one character
        dataset_id: Owning MTZ dataset, 0 or 1
        position: Index of the column in the dataset's column list
    """

    label: str = Field(..., min_length=1, description="MTZ column label")
    type_code: str = Field(..., min_length=1, max_length=1, description="MTZ column type")
    dataset_id: int = Field(..., ge=0, le=1, description="MTZ dataset id")
    position: int = Field(default=-1, description="Position in the column list")

    @field_validator("label")
    @classmethod
    def label_has_no_spaces(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError(f"column label must not contain whitespace: {v!r}")
        return v

    def __str__(self) -> str:
        return f"{self.label} ({self.type_code}, dataset {self.dataset_id})"
