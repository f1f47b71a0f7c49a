"""JSON submission record for submitted orders and credit card requests."""

import json
import logging
import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Union

from ..models.credit_card_request import CreditCardSubmission
from ..models.order_snapshot import OrderSnapshot

logger = logging.getLogger(__name__)


def _sanitize_for_json(obj: Any) -> Any:
    """Ensure JSON-serializable; Decimal becomes str, tuples become lists."""
    if isinstance(obj, dict):
        return {k: _sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize_for_json(v) for v in obj]
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (str, int, float, type(None), bool)):
        return obj
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    return str(obj)


def _record_name(order_number: str, timestamp) -> str:
    name = order_number or timestamp.strftime("%Y%m%dT%H%M%S%f")
    return re.sub(r"[^A-Za-z0-9_.-]", "_", name)


def _write(record: dict, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(_sanitize_for_json(record), f, indent=2, ensure_ascii=False)
    return path


def write_submission(snapshot: OrderSnapshot, output_dir: Union[str, Path]) -> Path:
    """Write the submission record of an order.

    Creates <output_dir>/<order_number or timestamp>.json containing the
    snapshot (details, items, totals, timestamp).

    Returns:
        Path to the written JSON file
    """
    path = Path(output_dir) / f"{_record_name(snapshot.order_number, snapshot.timestamp)}.json"
    record = {"type": "order", **snapshot.to_dict()}
    _write(record, path)
    logger.info("Wrote order submission record %s", path)
    return path


def write_credit_card_submission(submission: CreditCardSubmission, output_dir: Union[str, Path]) -> Path:
    """Write <output_dir>/kreditkarte_<order_number or timestamp>.json."""
    name = _record_name(submission.request.order_number, submission.timestamp)
    path = Path(output_dir) / f"kreditkarte_{name}.json"
    _write({"type": "credit_card_request", **submission.to_dict()}, path)
    logger.info("Wrote credit card submission record %s", path)
    return path
