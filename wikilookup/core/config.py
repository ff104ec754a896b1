"""Configuration management for wikilookup."""

from dataclasses import asdict, dataclass
from typing import Any, Dict
from pathlib import Path
import yaml


@dataclass
class Config:
    """Endpoints, headers and defaults shared by all lookups."""

    user_agent: str = "wikilookup/0.1.0"
    timeout: float = 30.0
    cache_control: str = "max-age=0"
    wikipedia_api_template: str = "https://{language}.wikipedia.org/w/api.php"
    wikidata_claims_url: str = "https://wikidata.org/w/api.php"
    wikidata_labels_url: str = "https://www.wikidata.org/w/api.php"
    pageviews_url: str = "https://wikimedia.org/api/rest_v1/metrics/pageviews/per-article"
    suggest_url: str = "https://suggestqueries.google.com/complete/search"
    label_language: str = "en"
    label_batch_size: int = 50  # wbgetentities accepts at most 50 ids
    coordinates_language: str = "en"
    default_window_days: int = 30
    suggest_language: str = "en"

    def __post_init__(self) -> None:
        if self.label_batch_size < 1:
            raise ValueError("label_batch_size must be at least 1")

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def wikipedia_api_url(self, language: str) -> str:
        return self.wikipedia_api_template.format(language=language)
