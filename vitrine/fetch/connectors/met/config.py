"""Shared Metropolitan Museum of Art collection API constants."""

from __future__ import annotations

BASE_URL = "https://collectionapi.metmuseum.org/public/collection/v1"

# The /objects endpoint returns every matching id in one response; the
# resolver still requests it through the paginated interface.
OBJECTS_PATH = "/objects"
SEARCH_PATH = "/search"
AUTOCOMPLETE_PATH = "/search/autocomplete"
DEPARTMENTS_PATH = "/departments"

# departmentIds are joined with a pipe: departmentIds=1|3|11
DEPARTMENT_ID_SEPARATOR = "|"


def object_path(object_id: int) -> str:
    return f"{OBJECTS_PATH}/{object_id}"


def related_path(object_id: int) -> str:
    return f"{OBJECTS_PATH}/{object_id}/related"
