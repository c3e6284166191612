import json
import hashlib
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel


def _as_mapping(item: Any) -> Dict[str, Any]:
    if isinstance(item, BaseModel):
        return item.model_dump(by_alias=True)
    if isinstance(item, Mapping):
        return dict(item)
    return {"value": item}


def _field(data: Dict[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def item_key(item: Any) -> str:
    """
    Identity key used to spot duplicate entries.

    Examples:
      {"jobTitle": "Engineer", "company": "Acme"} -> "engineer|acme"
      {"school": "MIT", "degree": "BSc"}          -> "mit|bsc"
      Skill(name=" Python ")                      -> "python"
      anything else                               -> md5 of its canonical JSON
    """
    data = _as_mapping(item)

    job_title = _field(data, "jobTitle", "job_title")
    company = data.get("company")
    if job_title is not None or company is not None:
        return f"{(job_title or '').strip()}|{(company or '').strip()}".lower()

    school = data.get("school")
    degree = data.get("degree")
    if school is not None or degree is not None:
        return f"{(school or '').strip()}|{(degree or '').strip()}".lower()

    if data.get("name") is not None:
        return str(data["name"]).strip().lower()

    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


def deduplicate(items: List[Any]) -> List[Any]:
    """Keep the first occurrence of every key, in original order."""
    seen = set()
    unique: List[Any] = []
    for item in items:
        key = item_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
