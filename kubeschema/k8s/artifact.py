"""K8s artifact implementation for YAML manifests.

This module provides the K8sArtifact class that represents one or more
Kubernetes YAML files as text and parses them on demand.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from ruamel.yaml import YAML


@dataclass(frozen=True)
class K8sArtifact:
    """Kubernetes manifest artifact.

    Attributes:
        files: Mapping from file path to YAML content as string.
               Example: ``{"endpoints.yaml": "apiVersion: v1\\n..."}``

    Example:
        >>> yaml_content = '''
        ... apiVersion: v1
        ... kind: Endpoints
        ... metadata:
        ...   name: payments-api
        ... '''
        >>> artifact = K8sArtifact(files={"endpoints.yaml": yaml_content})
        >>> [doc["kind"] for _, _, doc in artifact.iter_documents()]
        ['Endpoints']
    """
    files: Dict[str, str]

    def to_serializable(self) -> Dict:
        """Return a JSON-serializable view for logging."""
        return {"files": self.files}

    def documents(self, filepath: str) -> List[Tuple[int, Any]]:
        """Parse one file and return its non-empty YAML documents.

        Multi-document files (separated by ``---``) yield one entry per
        document; documents keep their index in the file.

        Args:
            filepath: Key of the file in ``files``

        Returns:
            List of (document index, document) pairs

        Raises:
            ruamel.yaml.error.YAMLError: the file is not valid YAML
        """
        yaml = YAML(typ="safe")
        return [
            (index, doc)
            for index, doc in enumerate(yaml.load_all(self.files[filepath]))
            if doc is not None
        ]

    def iter_documents(self) -> Iterator[Tuple[str, int, Any]]:
        """Yield (file path, document index, document) for every file."""
        for filepath in self.files:
            for index, doc in self.documents(filepath):
                yield filepath, index, doc

    @classmethod
    def from_file(cls, file_path: str) -> "K8sArtifact":
        """Load K8sArtifact from a YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            K8sArtifact with the file content keyed by file name
        """
        path = Path(file_path)
        content = path.read_text(encoding="utf-8")
        return cls(files={path.name: content})

    @classmethod
    def from_dir(cls, dir_path: str, pattern: str = "*.yaml") -> "K8sArtifact":
        """Load K8sArtifact from directory with YAML files.

        Args:
            dir_path: Directory containing YAML files
            pattern: Glob pattern for files to include (default: ``*.yaml``)

        Returns:
            K8sArtifact with all matching files, keyed by relative path
        """
        dir_path_obj = Path(dir_path)
        files = {}

        for file_path in sorted(dir_path_obj.glob(pattern)):
            if file_path.is_file():
                rel_path = file_path.relative_to(dir_path_obj)
                files[str(rel_path)] = file_path.read_text(encoding="utf-8")

        return cls(files=files)
