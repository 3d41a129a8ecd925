"""
Module to read repository metadata out of project config files and merge it
into a single `RepoMetadata`.

Candidate files, lowest to highest priority (later files override earlier
ones field by field when the field is present):

    pyproject.toml   description: project.description, tool.poetry.description
                     homepage:    project.urls.homepage, project.urls.repository,
                                  tool.poetry.homepage, tool.poetry.repository
                     topics:      project.keywords, tool.poetry.keywords
    package.json     description: description
                     homepage:    homepage, repository.url
                     topics:      keywords
    metadata.json    description: description
    metadata.yml     homepage:    homepage, url, repository, website
    metadata.yaml    topics:      keywords, tags, topics

Repository links are normalized (``git+`` prefix and ``.git`` suffix removed).
Topics in the generic metadata files may also be a comma-separated string.
"""
import json
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from RepoSync.Model.RepoMetadata import RepoMetadata
from RepoSync.Utility.guards import as_mapping, as_text, as_text_list, first_present, split_delimited
from RepoSync.Utility.url import looks_like_url, normalize_repository_url

logger = logging.getLogger(__name__)


"""Per-file extraction result; ``None`` means the file does not define the field."""
@dataclass
class PartialMetadata:
    description: Optional[str] = None
    homepage: Optional[str] = None
    topics: Optional[List[str]] = None


def _repository_link(value: Any) -> Optional[str]:
    text = as_text(value)
    return normalize_repository_url(text) if text else None


def _urls_lookup(urls: Dict[str, Any], key: str) -> Any:
    for name, value in urls.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


def extract_pyproject(content: Dict[str, Any]) -> PartialMetadata:
    project = as_mapping(content.get("project"))
    poetry = as_mapping(as_mapping(content.get("tool")).get("poetry"))
    urls = as_mapping(project.get("urls"))
    return PartialMetadata(
        description=first_present(
            as_text(project.get("description")),
            as_text(poetry.get("description")),
        ),
        homepage=first_present(
            as_text(_urls_lookup(urls, "homepage")),
            _repository_link(_urls_lookup(urls, "repository")),
            as_text(poetry.get("homepage")),
            _repository_link(poetry.get("repository")),
        ),
        topics=first_present(
            as_text_list(project.get("keywords")),
            as_text_list(poetry.get("keywords")),
        ),
    )


def extract_package_json(content: Dict[str, Any]) -> PartialMetadata:
    repository = content.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")
    elif not (isinstance(repository, str) and looks_like_url(repository)):
        # npm shorthand such as "owner/repo" or "github:owner/repo"
        repository = None
    return PartialMetadata(
        description=as_text(content.get("description")),
        homepage=first_present(
            as_text(content.get("homepage")),
            _repository_link(repository),
        ),
        topics=as_text_list(content.get("keywords")),
    )


def _topics_or_delimited(value: Any) -> Optional[List[str]]:
    return first_present(as_text_list(value), split_delimited(value))


def extract_generic(content: Dict[str, Any]) -> PartialMetadata:
    return PartialMetadata(
        description=as_text(content.get("description")),
        homepage=first_present(
            as_text(content.get("homepage")),
            as_text(content.get("url")),
            _repository_link(content.get("repository")),
            as_text(content.get("website")),
        ),
        topics=first_present(
            _topics_or_delimited(content.get("keywords")),
            _topics_or_delimited(content.get("tags")),
            _topics_or_delimited(content.get("topics")),
        ),
    )


Extractor = Callable[[Dict[str, Any]], PartialMetadata]

CANDIDATE_FILES: Tuple[Tuple[str, Extractor], ...] = (
    ("pyproject.toml", extract_pyproject),
    ("package.json", extract_package_json),
    ("metadata.json", extract_generic),
    ("metadata.yml", extract_generic),
    ("metadata.yaml", extract_generic),
)

PARSERS: Dict[str, Callable[[str], Any]] = {
    ".json": json.loads,
    ".toml": tomllib.loads,
    ".yml": yaml.safe_load,
    ".yaml": yaml.safe_load,
}


def load_file(path: Path) -> Optional[Dict[str, Any]]:
    """Read and parse ``path``; any failure yields ``None``."""
    parser = PARSERS.get(path.suffix.lower())
    if parser is None:
        logger.warning("Unsupported file type: %s", path.suffix or path.name)
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None
    try:
        content = parser(text)
    except (ValueError, yaml.YAMLError) as e:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors
        logger.debug("Could not parse %s: %s", path, e)
        return None
    if not isinstance(content, dict):
        logger.debug("Ignoring %s: top level is not a mapping", path)
        return None
    return content


def merge(target: RepoMetadata, source: PartialMetadata) -> RepoMetadata:
    """Overlay every field ``source`` defines onto a copy of ``target``."""
    return RepoMetadata(
        description=first_present(source.description, target.description),
        homepage=first_present(source.homepage, target.homepage),
        topics=list(source.topics) if source.topics is not None else list(target.topics),
    )


class MetadataResolver:
    def __init__(self, candidates: Optional[Tuple[Tuple[str, Extractor], ...]] = None):
        self.candidates = candidates if candidates is not None else CANDIDATE_FILES
        self.sources: List[str] = []

    def resolve(self, base_dir: Union[str, Path, None] = None) -> RepoMetadata:
        base = Path(base_dir if base_dir is not None else os.getcwd())
        metadata = RepoMetadata()
        self.sources = []
        for file_name, extractor in self.candidates:
            content = load_file(base / file_name)
            if content is None:
                continue
            partial = extractor(content)
            logger.debug("Metadata from %s: %s", file_name, partial)
            metadata = merge(metadata, partial)
            self.sources.append(file_name)
        logger.info("Resolved metadata from %s", ", ".join(self.sources) or "no config files")
        return metadata


def resolve(base_dir: Union[str, Path, None] = None) -> RepoMetadata:
    return MetadataResolver().resolve(base_dir)
