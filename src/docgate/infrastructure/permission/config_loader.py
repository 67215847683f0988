"""Load the permission configuration document.

Shape::

    {
      "collections": [
        {"collectionId": "users", "operations": ["read", "write"],
         "conditions": [{"field": "status", "operator": "==", "value": "active"}]}
      ],
      "defaultAllow": false
    }
"""

from collections import Counter
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from docgate.domain.entities import CollectionPermission, FieldCondition, PermissionConfig
from docgate.domain.exceptions import ConfigurationError
from docgate.domain.value_objects import Operation

logger = structlog.get_logger(__name__)


class FieldConditionModel(BaseModel):
    field: str
    operator: str
    value: Any = None


class CollectionPermissionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    collection_id: str = Field(alias="collectionId")
    operations: list[Operation] = Field(default_factory=list)
    conditions: list[FieldConditionModel] | None = None


class PermissionConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    collections: list[CollectionPermissionModel] = Field(default_factory=list)
    default_allow: bool = Field(default=False, alias="defaultAllow")

    def to_domain(self) -> PermissionConfig:
        return PermissionConfig(
            collections=tuple(
                CollectionPermission(
                    collection_id=c.collection_id,
                    operations=frozenset(c.operations),
                    conditions=tuple(
                        FieldCondition(field=f.field, operator=f.operator, value=f.value)
                        for f in c.conditions or []
                    ),
                )
                for c in self.collections
            ),
            default_allow=self.default_allow,
        )


def parse_permission_config(raw_json: str | bytes) -> PermissionConfig:
    """Validate a JSON permission document. Raises ConfigurationError."""
    try:
        model = PermissionConfigModel.model_validate_json(raw_json)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid permission configuration: {e}") from e
    config = model.to_domain()

    counts = Counter(c.collection_id for c in config.collections)
    duplicates = sorted(cid for cid, n in counts.items() if n > 1)
    if duplicates:
        logger.warning("permission_config_duplicate_collections", collections=duplicates)
    return config


def load_permission_config(
    path: str | Path | None = None,
    raw_json: str | None = None,
) -> PermissionConfig:
    """Load from a file, else from inline JSON, else deny everything."""
    if path:
        try:
            raw_json = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read permission configuration {path}: {e}") from e
    if not raw_json:
        logger.warning("permission_config_missing", default_allow=False)
        return PermissionConfig()

    config = parse_permission_config(raw_json)
    logger.info(
        "permission_config_loaded",
        collections=len(config.collections),
        default_allow=config.default_allow,
    )
    return config
