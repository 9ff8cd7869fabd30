"""Repository reference model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RepositoryRef(BaseModel):
    """Identifies a repository on the hosting platform (owner + name)."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> RepositoryRef:
        """Parse an ``owner/name`` string. Raises ValueError on anything else."""
        text = (value or "").strip()
        parts = text.split("/")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise ValueError(f"repository must look like owner/name; got {value!r}")
        return cls(owner=parts[0].strip(), name=parts[1].strip())
