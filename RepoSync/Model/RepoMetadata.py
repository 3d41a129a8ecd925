from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from RepoSync.Utility.guards import as_text, as_text_list

"""Repository metadata synchronized between config files and GitHub."""
@dataclass
class RepoMetadata:
    description: Optional[str] = None
    homepage: Optional[str] = None
    topics: List[str] = field(default_factory=list)

    """Build a record from a GitHub "get repository" payload."""
    @classmethod
    def from_github(cls, data: Dict[str, Any]) -> "RepoMetadata":
        return cls(
            description=as_text(data.get("description")),
            homepage=as_text(data.get("homepage")),
            topics=as_text_list(data.get("topics")) or [],
        )
