"""Post-import sanity checks for an imported actor and its items.

These checks catch structurally broken imports (zero hit points, missing
provenance, unparseable weapon dice). They are not balance checks.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import d20

from npc_importer.core.config import get_settings
from npc_importer.core.logging import get_logger
from npc_importer.models.documents import (
    SpellDocument,
    TargetActorDocument,
    TargetItemDocument,
    WeaponDocument,
)


logger = get_logger(__name__)


@dataclass
class VerificationReport:
    """Result of verifying one imported actor.

    Attributes:
        actor: Actor name.
        checks: Named pass/fail checks.
        warnings: Non-fatal findings such as jutsu without a chakra cost.
    """

    actor: str
    checks: dict[str, bool] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(self.checks.values())

    @property
    def failed_checks(self) -> list[str]:
        return [name for name, ok in self.checks.items() if not ok]

    def summary(self) -> str:
        passed = sum(1 for ok in self.checks.values() if ok)
        lines = [f"{self.actor}: passed {passed}/{len(self.checks)} checks"]
        lines.extend(f"  failed: {name}" for name in self.failed_checks)
        lines.extend(f"  warning: {warning}" for warning in self.warnings)
        return "\n".join(lines)


def _positive(value: int | None) -> bool:
    return value is not None and value > 0


def _has_chakra_cost(cost: int | str) -> bool:
    # Generators sometimes write the cost as text ("5")
    try:
        return int(cost) > 0
    except (TypeError, ValueError):
        return False


def is_valid_dice(expression: str) -> bool:
    """Whether a damage expression parses as dice notation."""
    if not expression or not expression.strip():
        return False
    try:
        d20.parse(expression)
    except d20.RollError:
        return False
    return True


def verify_import(
    actor: TargetActorDocument,
    items: Sequence[TargetItemDocument],
    *,
    provenance_scope: str | None = None,
) -> VerificationReport:
    """Check an imported actor and the items attached to it.

    Args:
        actor: The actor document as imported.
        items: Item documents attached to the actor.
        provenance_scope: Flag scope holding source data; defaults to the
            configured scope.

    Returns:
        The report. Weapons without a parseable first damage part fail;
        jutsu without a positive chakra cost only warn.
    """
    scope = provenance_scope or get_settings().importer.provenance_scope
    attributes = actor.system.attributes
    report = VerificationReport(actor=actor.name)

    report.checks["hp"] = _positive(attributes.hp.max)
    report.checks["cp"] = _positive(attributes.cp.max)
    report.checks["ac"] = _positive(attributes.ac.flat)
    report.checks["speed"] = _positive(attributes.movement.walk)
    report.checks["abilities"] = bool(actor.system.abilities) and all(
        score.value > 0 for score in actor.system.abilities.values()
    )
    report.checks["has_items"] = len(items) > 0
    report.checks["has_flags"] = bool(actor.flags.get(scope))

    for item in items:
        if isinstance(item, WeaponDocument):
            parts = item.system.damage.parts
            report.checks[f"weapon_damage:{item.name}"] = bool(parts) and is_valid_dice(parts[0][0])
        elif isinstance(item, SpellDocument):
            if not _has_chakra_cost(item.system.chakra_cost):
                report.warnings.append(f"{item.name} has no chakra cost")

    logger.debug(
        "Import verified",
        actor=actor.name,
        passed=report.passed,
        failed=report.failed_checks,
        warnings=len(report.warnings),
    )
    return report


__all__ = [
    "VerificationReport",
    "is_valid_dice",
    "verify_import",
]
