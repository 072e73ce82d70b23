"""Configuration loading for intl-extract."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings

CONFIG_RELATIVE_PATH = Path("config") / "intl-extract.yaml"


class IgnoreConfig(BaseModel):
    """Settings for the ignore system."""

    use_gitignore: bool = True
    use_intlextractignore: bool = True
    extra_patterns: list[str] = Field(default_factory=list)


class ParsingConfig(BaseModel):
    """Settings for source parsing."""

    languages: list[str] = Field(
        default_factory=lambda: ["javascript", "typescript", "tsx"]
    )
    max_file_size_kb: int = 500


class ExtractionOptions(BaseModel):
    """File-scoped extraction options.

    Accepts both the snake_case field names and the camelCase names used by
    react-intl build configs (``messagesDir``, ``enforceDescriptions``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages_dir: Path | None = None
    extract_source_location: bool = False
    enforce_descriptions: bool = False
    module_source_name: str = "react-intl"


class ProjectConfig(BaseModel):
    """Top-level project settings."""

    name: str = "my-project"
    root: str = "."


class IntlExtractConfig(BaseSettings):
    """Main configuration, loaded from YAML + environment variables."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    extraction: ExtractionOptions = Field(default_factory=ExtractionOptions)

    @classmethod
    def from_yaml(cls, path: Path) -> "IntlExtractConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        return cls(**data)

    @classmethod
    def load(cls, project_root: Path | None = None) -> "IntlExtractConfig":
        """Load configuration, searching for config/intl-extract.yaml relative to project root."""
        if project_root is None:
            project_root = Path.cwd()

        config_path = project_root / CONFIG_RELATIVE_PATH
        if config_path.exists():
            config = cls.from_yaml(config_path)
        else:
            config = cls()

        root = Path(config.project.root)
        if not root.is_absolute():
            root = project_root / root
        root = root.resolve()
        config.project.root = str(root)

        messages_dir = config.extraction.messages_dir
        if messages_dir is not None and not messages_dir.is_absolute():
            config.extraction.messages_dir = root / messages_dir

        return config

    def to_yaml(self) -> str:
        """Render this configuration as YAML, using camelCase extraction keys."""
        data = self.model_dump(mode="json")
        data["extraction"] = self.extraction.model_dump(mode="json", by_alias=True)
        return yaml.safe_dump(data, sort_keys=False)
