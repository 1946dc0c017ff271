"""Check that the initLedger seed records satisfy their record schemas.

Schema documents themselves are meta-validated when the registry loads.
"""

import logging

from jsonschema import ValidationError

from carauction.contract.seed import SEED_LISTINGS, SEED_MEMBERS, SEED_VEHICLES
from carauction.validation.validator import get_schema_registry

logger = logging.getLogger(__name__)


def validate() -> int:
    registry = get_schema_registry()
    failures = 0
    for seeds in (SEED_MEMBERS, SEED_VEHICLES, SEED_LISTINGS):
        for key, record in seeds.items():
            try:
                registry.validate(record.SCHEMA, record.to_dict())
            except ValidationError as exc:
                logger.error("seed %s (%s) invalid: %s", key, record.DOC_TYPE, exc.message)
                failures += 1
    logger.info("checked schemas %s", ", ".join(registry.names()))
    return failures


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(1 if validate() else 0)
