"""Pydantic model for project configuration."""

from pydantic import BaseModel, ConfigDict, Field

from specai.core.infrastructure.models.state import Phase

DEFAULT_PLANNER_MODEL = "qwen2.5:7b"
DEFAULT_CODER_MODEL = "qwen2.5-coder:7b"

_CODER_PHASES = frozenset({Phase.IMPLEMENT, Phase.REVIEW})


class ProjectInfo(BaseModel):
    """Project identity."""

    name: str = Field(..., min_length=1, description="Project name")
    description: str = Field(default="", description="Short project description")


class ModelRoles(BaseModel):
    """Model identifiers for the two logical generation roles."""

    planner: str = Field(default=DEFAULT_PLANNER_MODEL, min_length=1)
    coder: str = Field(default=DEFAULT_CODER_MODEL, min_length=1)


class ConfigModel(BaseModel):
    """Model representing project configuration stored in .specai/config.json."""

    version: str = Field(..., description="SpecAI version that created the project")
    project: ProjectInfo
    models: ModelRoles = Field(default_factory=ModelRoles)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "version": "0.1.0",
                "project": {"name": "myproject", "description": ""},
                "models": {
                    "planner": DEFAULT_PLANNER_MODEL,
                    "coder": DEFAULT_CODER_MODEL,
                },
            }
        }
    )

    def model_for(self, phase: Phase) -> str:
        """Return the model identifier used to generate text for a phase.

        Planning phases use the planner role; implement and review use the
        coder role.
        """
        if phase in _CODER_PHASES:
            return self.models.coder
        return self.models.planner
