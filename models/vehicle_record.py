# -*- coding: utf-8 -*-
"""
Vehicle record model.

A ``VehicleRecord`` is the editable part of a marketplace listing: the scalar
fields of ``SCALAR_FIELDS`` plus one status/remark pair per checkpoint of
``CHECKPOINTS``. Keys are the remote service's wire names.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from models.checkpoint import (
    CHECKPOINTS, STATUS_ISSUE, Checkpoint, get_checkpoint
)


KIND_TEXT = "text"
KIND_NUMBER = "number"
KIND_BOOLEAN = "boolean"
KIND_CHOICE = "choice"


@dataclass(frozen=True)
class ScalarField:
    """Definition of one scalar record field."""

    key: str
    label: str
    kind: str = KIND_TEXT
    default: Any = ""
    choices: Tuple[str, ...] = ()


SCALAR_FIELDS: Tuple[ScalarField, ...] = (
    ScalarField("price", "Price", KIND_NUMBER),
    ScalarField("category", "Category", KIND_CHOICE, "4w", ("4w", "2w")),
    ScalarField("vehicleType", "Vehicle Type", KIND_CHOICE, "Private", ("Private", "Commercial")),
    ScalarField("make", "Make"),
    ScalarField("model", "Model"),
    ScalarField("variant", "Variant"),
    ScalarField("year", "Year", KIND_NUMBER),
    ScalarField("status", "Listing Status", KIND_CHOICE, "For Sale", ("For Sale", "Sold", "Paused")),
    ScalarField("verified", "Verified", KIND_BOOLEAN, False),
    ScalarField("mfgYear", "Manufacturing Year", KIND_NUMBER),
    ScalarField("regYear", "Registration Year", KIND_NUMBER),
    ScalarField("validUpto", "Valid Upto"),
    ScalarField("regNumber", "Registration Number"),
    ScalarField("chassisNumber", "Chassis Number"),
    ScalarField("rtoState", "RTO State"),
    ScalarField("odometer", "Odometer", KIND_NUMBER),
    ScalarField("fuelType", "Fuel Type", KIND_CHOICE, "Petrol",
                ("Petrol", "Diesel", "CNG", "Electric")),
    ScalarField("transmission", "Transmission", KIND_CHOICE, "Manual", ("Manual", "Automatic")),
    ScalarField("ownership", "Ownership", KIND_CHOICE, "1st Owner",
                ("1st Owner", "2nd Owner", "3rd Owner", "4th+")),
    ScalarField("tax", "Tax", KIND_CHOICE, "LTT", ("LTT", "OTT")),
    ScalarField("rcAvailable", "RC Available", KIND_BOOLEAN, True),
    ScalarField("scraped", "Scraped", KIND_BOOLEAN, False),
    ScalarField("hypothecation", "Hypothecation", KIND_CHOICE, "NA", ("Open", "Close", "NA")),
    ScalarField("insurance", "Insurance", KIND_CHOICE, "",
                ("", "Comprehensive", "Third Party", "Expired")),
    ScalarField("insuranceExpiry", "Insurance Expiry"),
    ScalarField("serviceHistory", "Service History", KIND_CHOICE, "Available",
                ("Available", "Not Available")),
    ScalarField("color", "Color"),
    ScalarField("remarks", "Remarks"),
)

SCALAR_FIELDS_BY_KEY: Dict[str, ScalarField] = {f.key: f for f in SCALAR_FIELDS}

NUMERIC_FIELDS: Tuple[str, ...] = tuple(f.key for f in SCALAR_FIELDS if f.kind == KIND_NUMBER)

# Checkpoint field name -> (checkpoint, "status" | "remark")
_CHECKPOINT_FIELDS: Dict[str, Tuple[Checkpoint, str]] = {}
for _cp in CHECKPOINTS:
    _CHECKPOINT_FIELDS[_cp.status_field] = (_cp, "status")
    _CHECKPOINT_FIELDS[_cp.remark_field] = (_cp, "remark")


def field_names() -> List[str]:
    """All record field names in catalog order."""
    names = [f.key for f in SCALAR_FIELDS]
    for cp in CHECKPOINTS:
        names.extend((cp.status_field, cp.remark_field))
    return names


def is_record_field(key: str) -> bool:
    return key in SCALAR_FIELDS_BY_KEY or key in _CHECKPOINT_FIELDS


def field_label(key: str) -> str:
    """Human label for a record field (checkpoint remarks get a suffix)."""
    if key in SCALAR_FIELDS_BY_KEY:
        return SCALAR_FIELDS_BY_KEY[key].label
    if key in _CHECKPOINT_FIELDS:
        cp, part = _CHECKPOINT_FIELDS[key]
        return cp.label if part == "status" else f"{cp.label} remark"
    raise KeyError(f"Unknown record field: {key}")


class VehicleRecord:
    """
    Mutable record owned by one wizard session.

    ``set`` is strict: unknown keys raise ``KeyError`` and values of the wrong
    type or outside a closed choice set raise ``ValueError``. ``from_dict`` is
    the tolerant counterpart used for drafts and server payloads.
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = self.defaults()
        for key, value in (values or {}).items():
            self.set(key, value)

    @staticmethod
    def defaults() -> Dict[str, Any]:
        data = {f.key: f.default for f in SCALAR_FIELDS}
        for cp in CHECKPOINTS:
            data[cp.status_field] = cp.default_status
            data[cp.remark_field] = ""
        return data

    # ==================== Field access ====================

    def get(self, key: str) -> Any:
        if not is_record_field(key):
            raise KeyError(f"Unknown record field: {key}")
        return self._values[key]

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def set(self, key: str, value: Any) -> None:
        """Replace a scalar or checkpoint field after checking its value."""
        self._check(key, value)
        self._values[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return is_record_field(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def items(self):
        return self._values.items()

    @staticmethod
    def _check(key: str, value: Any) -> None:
        if key in SCALAR_FIELDS_BY_KEY:
            spec = SCALAR_FIELDS_BY_KEY[key]
            if spec.kind == KIND_BOOLEAN:
                if not isinstance(value, bool):
                    raise ValueError(f"{key} expects a boolean, got {value!r}")
            elif not isinstance(value, str):
                raise ValueError(f"{key} expects a string, got {value!r}")
            elif spec.kind == KIND_CHOICE and value not in spec.choices:
                raise ValueError(f"{value!r} is not a valid choice for {key}")
            return

        if key in _CHECKPOINT_FIELDS:
            cp, part = _CHECKPOINT_FIELDS[key]
            if part == "status":
                if value not in cp.allowed_statuses:
                    raise ValueError(
                        f"{value!r} is not an allowed status for {cp.id} "
                        f"(allowed: {', '.join(cp.allowed_statuses)})"
                    )
            elif not isinstance(value, str):
                raise ValueError(f"{key} expects a string, got {value!r}")
            return

        raise KeyError(f"Unknown record field: {key}")

    # ==================== Checkpoints ====================

    def status(self, checkpoint_id: str) -> str:
        return self._values[get_checkpoint(checkpoint_id).status_field]

    def remark(self, checkpoint_id: str) -> str:
        return self._values[get_checkpoint(checkpoint_id).remark_field]

    def issues(self) -> List[Checkpoint]:
        """Checkpoints currently flagged as Issue, in catalog order."""
        return [cp for cp in CHECKPOINTS if self._values[cp.status_field] == STATUS_ISSUE]

    def issue_count(self) -> int:
        return len(self.issues())

    # ==================== Conversion ====================

    def copy(self) -> "VehicleRecord":
        clone = VehicleRecord()
        clone._values = dict(self._values)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "VehicleRecord":
        """
        Build a record from loosely-typed data.

        Unknown keys are dropped, missing keys keep their defaults and values
        that do not fit a field fall back to its default. Numbers are accepted
        for number/text fields and "true"/"false" strings for booleans.
        """
        record = cls()
        for key, value in (data or {}).items():
            if not is_record_field(key):
                continue
            value = _loosen(key, value)
            try:
                record.set(key, value)
            except ValueError:
                continue
        return record

    def __eq__(self, other):
        if not isinstance(other, VehicleRecord):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return (f"VehicleRecord(make={self._values['make']!r}, "
                f"model={self._values['model']!r}, issues={self.issue_count()})")


def _loosen(key: str, value: Any) -> Any:
    spec = SCALAR_FIELDS_BY_KEY.get(key)
    if spec is None:
        return value
    if spec.kind == KIND_BOOLEAN and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    if spec.kind in (KIND_NUMBER, KIND_TEXT) and isinstance(value, (int, float)) \
            and not isinstance(value, bool):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)
    return value


