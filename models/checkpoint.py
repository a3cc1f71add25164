# -*- coding: utf-8 -*-
"""
Inspection checkpoint catalog.

Every checkpoint contributes two record fields, ``insp_<id>_status`` and
``insp_<id>_remark``, and may own evidence media slots. The catalog is closed:
validation, evidence visibility and serialization all iterate it rather than
matching field-name prefixes.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


STATUS_OK = "OK"
STATUS_ISSUE = "Issue"
STATUS_NA = "NA"

ALL_STATUSES = (STATUS_OK, STATUS_ISSUE, STATUS_NA)


@dataclass(frozen=True)
class Checkpoint:
    """One inspected item of the vehicle."""

    id: str
    label: str
    step: int
    allow_na: bool = False
    default_status: str = STATUS_OK
    image_slots: Tuple[str, ...] = ()
    video_slots: Tuple[str, ...] = ()
    always_document: bool = False

    @property
    def status_field(self) -> str:
        return f"insp_{self.id}_status"

    @property
    def remark_field(self) -> str:
        return f"insp_{self.id}_remark"

    @property
    def allowed_statuses(self) -> Tuple[str, ...]:
        if self.allow_na:
            return ALL_STATUSES
        return (STATUS_OK, STATUS_ISSUE)

    @property
    def slots(self) -> Tuple[str, ...]:
        """All evidence slots bound to this checkpoint."""
        return self.image_slots + self.video_slots


def _img(*names: str) -> Tuple[str, ...]:
    return tuple(f"img_insp_{name}" for name in names)


def _numbered(name: str, count: int) -> Tuple[str, ...]:
    return tuple(f"img_insp_{name}_{i}" for i in range(1, count + 1))


TYRE_SLOTS = ("img_tyre_1", "img_tyre_2", "img_tyre_3", "img_tyre_4", "img_tyre_optional")


# ============================================================================
# Catalog (ordered by wizard step, then by on-screen order)
# ============================================================================

CHECKPOINTS: Tuple[Checkpoint, ...] = (
    # Step 2: Exterior & Tyres
    Checkpoint("bumper", "Bumper", 2, image_slots=_img("bumper")),
    Checkpoint("bonnet", "Bonnet", 2, image_slots=_img("bonnet")),
    Checkpoint("roof", "Roof", 2, image_slots=_img("roof")),
    Checkpoint("fender", "Fender", 2, image_slots=_img("fender")),
    Checkpoint("doors", "Doors", 2, image_slots=_numbered("door", 4)),
    Checkpoint("pillars", "Pillars", 2, image_slots=_numbered("pillar", 6)),
    Checkpoint("quarter_panel", "Quarter Panel", 2, image_slots=_img("quarter_panel")),
    Checkpoint("dickey_door", "Dickey Door", 2, image_slots=_img("dickey_door")),
    Checkpoint("apron", "Apron", 2, image_slots=_numbered("apron", 2)),
    Checkpoint("apron_leg", "Apron Leg", 2, image_slots=_numbered("apron_leg", 2)),
    Checkpoint("firewall", "Firewall", 2, image_slots=_img("firewall")),
    Checkpoint("cowl_top", "Cowl Top", 2, image_slots=_img("cowl_top")),
    Checkpoint("lower_cross_member", "Lower Cross Member", 2,
               image_slots=_img("lower_cross_member")),
    Checkpoint("upper_cross_member", "Upper Cross Member", 2,
               image_slots=_img("upper_cross_member")),
    Checkpoint("front_show", "Front Show", 2, allow_na=True, image_slots=_img("front_show")),
    Checkpoint("windshield", "Windshield", 2, allow_na=True, image_slots=_img("windshield")),
    Checkpoint("orvm", "ORVM", 2, image_slots=_numbered("orvm", 2)),
    Checkpoint("lights", "Lights", 2, image_slots=_numbered("lights", 2)),
    Checkpoint("fog_lights", "Fog Lights", 2, allow_na=True,
               image_slots=_numbered("fog_lights", 2)),
    Checkpoint("alloy_wheels", "Alloy Wheels", 2),
    Checkpoint("wheels", "Tyres", 2, image_slots=TYRE_SLOTS, always_document=True),

    # Step 3: Interior & Electrical
    Checkpoint("power_window", "Power Windows", 3, allow_na=True),
    Checkpoint("airbag", "Airbags", 3, allow_na=True),
    Checkpoint("electrical", "General Electricals", 3),
    Checkpoint("music_system", "Music System", 3, allow_na=True),
    Checkpoint("camera_sensor", "Camera / Sensors", 3, allow_na=True,
               default_status=STATUS_NA),
    Checkpoint("interior", "Interior Condition", 3, allow_na=True),
    Checkpoint("seat", "Seats", 3),
    Checkpoint("sunroof", "Sunroof", 3, allow_na=True, default_status=STATUS_NA),

    # Step 4: Engine & Transmission
    Checkpoint("engine_assembly", "Engine Assembly", 4,
               image_slots=_img("engine_assembly"), always_document=True),
    Checkpoint("battery", "Battery", 4, image_slots=_img("battery"), always_document=True),
    Checkpoint("engine_oil", "Engine Oil Condition", 4,
               image_slots=_img("engine_oil"), always_document=True),
    Checkpoint("engine_oil_level", "Engine Oil Level", 4,
               image_slots=_img("engine_oil_level"), always_document=True),
    Checkpoint("coolant", "Coolant", 4, image_slots=_img("coolant"), always_document=True),
    Checkpoint("engine_mounting", "Engine Mounting", 4),
    Checkpoint("engine_sound", "Engine Sound", 4, video_slots=("video_insp_engine_sound",)),
    Checkpoint("engine_smoke", "Engine Smoke", 4, video_slots=("video_insp_engine_smoke",)),
    Checkpoint("blowby", "Blowby (Back Compression)", 4, video_slots=("video_insp_blowby",)),
    Checkpoint("back_compression", "Back Compression (Observation)", 4),
    Checkpoint("clutch", "Clutch Operation", 4),
    Checkpoint("gear_shifting", "Gear Shifting", 4),

    # Step 5: Steering & Suspension
    Checkpoint("suspension", "Suspension", 5),
    Checkpoint("steering", "Steering", 5),
    Checkpoint("brake", "Brakes", 5),

    # Step 6: Air Conditioning
    Checkpoint("ac", "AC Cooling", 6),
    Checkpoint("heater", "Heater", 6),
    Checkpoint("climate_control", "Climate Control", 6, allow_na=True,
               default_status=STATUS_NA),
)

CHECKPOINTS_BY_ID: Dict[str, Checkpoint] = {cp.id: cp for cp in CHECKPOINTS}

CHECKPOINT_STEPS = (2, 3, 4, 5, 6)


def get_checkpoint(checkpoint_id: str) -> Checkpoint:
    """Look up a checkpoint by id. Raises KeyError for unknown ids."""
    try:
        return CHECKPOINTS_BY_ID[checkpoint_id]
    except KeyError:
        raise KeyError(f"Unknown checkpoint: {checkpoint_id}") from None


def checkpoints_for_step(step: int) -> List[Checkpoint]:
    return [cp for cp in CHECKPOINTS if cp.step == step]
