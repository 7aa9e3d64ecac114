"""Department catalog: keys, display names and rating criteria."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from dept_analytics.exceptions import CatalogError, UnknownDepartmentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Department:
    """A rateable department and its ordered criteria."""

    key: str
    name: str
    criteria: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "criteria": list(self.criteria)}


class DepartmentCatalog:
    """Read-only lookup of departments by key.

    Iteration yields departments ordered by display name, which is the order
    the department picker shows them in.
    """

    def __init__(self, departments: List[Department]):
        self._departments: Dict[str, Department] = {d.key: d for d in departments}

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "DepartmentCatalog":
        """Build a catalog from ``{key: {"name": ..., "criteria": [...]}}``.

        Raises
        ------
        CatalogError
            If an entry is not an object with a string ``name`` and a list of
            string ``criteria``.
        """

        if not isinstance(payload, Mapping):
            raise CatalogError("Department catalog must be a JSON object.")

        departments: List[Department] = []
        for key, entry in payload.items():
            if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str):
                raise CatalogError(f"Department '{key}' is missing a name.")
            criteria = entry.get("criteria", [])
            if not isinstance(criteria, list) or not all(
                isinstance(c, str) for c in criteria
            ):
                raise CatalogError(
                    f"Department '{key}' criteria must be a list of strings."
                )
            departments.append(
                Department(key=str(key), name=entry["name"], criteria=tuple(criteria))
            )
        return cls(departments)

    def get(self, key: str) -> Optional[Department]:
        """Return the department for *key* or *None*."""
        return self._departments.get(key)

    def require(self, key: str) -> Department:
        """Return the department for *key*.

        Raises
        ------
        UnknownDepartmentError
            If *key* is not in the catalog.
        """
        department = self._departments.get(key)
        if department is None:
            raise UnknownDepartmentError(key)
        return department

    def name_for(self, key: str) -> str:
        """Return the display name for *key*, falling back to the key itself."""
        department = self._departments.get(key)
        return department.name if department else key

    def keys(self) -> List[str]:
        return [d.key for d in self]

    def __contains__(self, key: object) -> bool:
        return key in self._departments

    def __iter__(self) -> Iterator[Department]:
        return iter(sorted(self._departments.values(), key=lambda d: d.name))

    def __len__(self) -> int:
        return len(self._departments)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {d.key: d.to_dict() for d in self}


def load_catalog_file(path: Union[str, Path]) -> DepartmentCatalog:
    """Load a :class:`DepartmentCatalog` from a JSON file.

    Raises
    ------
    CatalogError
        If the file cannot be read, is not valid JSON or is malformed.
    """

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Could not read department catalog {path}: {exc}") from exc

    catalog = DepartmentCatalog.from_mapping(payload)
    logger.debug("Loaded %d departments from %s", len(catalog), path)
    return catalog


DEFAULT_CATALOG = DepartmentCatalog(
    [
        Department(
            key="library",
            name="Library Services",
            criteria=(
                "Book availability and collection quality",
                "Staff helpfulness and knowledge",
                "Facility cleanliness and maintenance",
                "Study environment and noise levels",
                "Digital resources and computer access",
            ),
        ),
        Department(
            key="student_affairs",
            name="Department of Student Affairs",
            criteria=(
                "Response time to student queries",
                "Staff professionalism and courtesy",
                "Problem resolution effectiveness",
                "Event organization and management",
                "Student support services quality",
            ),
        ),
        Department(
            key="registrar",
            name="Registrar Office",
            criteria=(
                "Document processing speed",
                "Accuracy of academic records",
                "Staff knowledge of procedures",
                "Online portal functionality",
                "Communication clarity and timeliness",
            ),
        ),
        Department(
            key="cafeteria",
            name="Cafeteria Services",
            criteria=(
                "Food quality and taste",
                "Hygiene and cleanliness standards",
                "Variety of menu options",
                "Pricing and value for money",
                "Service speed and staff behavior",
            ),
        ),
        Department(
            key="transport",
            name="Transport Services",
            criteria=(
                "Bus punctuality and reliability",
                "Vehicle condition and safety",
                "Route coverage and accessibility",
                "Driver behavior and professionalism",
                "Fare structure and payment options",
            ),
        ),
        Department(
            key="it_services",
            name="IT Services",
            criteria=(
                "Network connectivity and speed",
                "Software support and troubleshooting",
                "Hardware maintenance and availability",
                "Response time to technical issues",
                "User training and documentation",
            ),
        ),
    ]
)
