"""Conversion of source NPC records into target store documents.

The converter turns one NPC record into an actor document and each of its
jutsu, weapons and free-text abilities into an item document. Jutsu and
weapons are looked up in the content index first; an existing item is
cloned without its identity, otherwise a new item is synthesized from the
record's free text. Free-text abilities are always synthesized.

Example:
    >>> converter = NPCConverter(index)
    >>> actor = converter.convert_actor(record)
    >>> jutsu = SourceAbilityRecord.model_validate(record.jutsu[0])
    >>> converted = await converter.convert_ability(jutsu)
    >>> converted.entry.origin
    'created'
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from npc_importer.assets.resolver import IconResolver
from npc_importer.conversion.templates import (
    biography_html,
    jutsu_description_html,
    paragraph_html,
)
from npc_importer.core.config import ImportSettings, get_settings
from npc_importer.core.constants import CREATED_ORIGIN
from npc_importer.core.exceptions import MissingFieldError
from npc_importer.core.logging import get_logger
from npc_importer.extraction.jutsu import (
    classify_action,
    extract_activation,
    extract_damage_parts,
    extract_duration,
    extract_properties,
    extract_range,
    extract_save_ability,
    extract_target,
    governing_ability,
    rank_to_level,
    school_for_nature,
)
from npc_importer.extraction.weapons import (
    attack_profile,
    extract_weapon_damage,
    extract_weapon_flags,
    extract_weapon_ranges,
    weapon_category,
)
from npc_importer.models.documents import (
    AbilityScore,
    Activation,
    ActorAttributes,
    ActorDetails,
    ActorSystem,
    ArmorClass,
    Biography,
    CreatureType,
    Damage,
    Description,
    Duration,
    FeatDocument,
    FeatSystem,
    Movement,
    Pool,
    Range,
    Save,
    SpellDocument,
    SpellSystem,
    Target,
    TargetActorDocument,
    TargetItemDocument,
    WeaponDocument,
    WeaponSystem,
    WeaponType,
)
from npc_importer.models.enums import ItemKind, ReportOutcome, SourceKind
from npc_importer.models.report import ImportReportEntry
from npc_importer.models.source import (
    FreeTextAbility,
    SourceAbilityRecord,
    SourceNPCRecord,
    SourceWeaponRecord,
)
from npc_importer.resolution.content_index import ContentIndex, FoundItem


logger = get_logger(__name__)

SourceItemRecord = SourceAbilityRecord | SourceWeaponRecord | FreeTextAbility | str
"""Anything ``convert_ability`` accepts; a bare string is a free-text ability."""


@dataclass(frozen=True)
class ConvertedItem:
    """An item document ready to attach, with its report line."""

    document: TargetItemDocument
    entry: ImportReportEntry


class NPCConverter:
    """Builds actor and item documents from source records.

    Attributes:
        index: Content index consulted before synthesizing jutsu and weapons.
        icons: Icon resolver for portraits and item icons.
        settings: Import settings (flag scopes, labels, proficiency).
    """

    def __init__(
        self,
        index: ContentIndex,
        icons: IconResolver | None = None,
        settings: ImportSettings | None = None,
    ) -> None:
        self.index = index
        self.icons = icons or IconResolver()
        self.settings = settings or get_settings().importer

    # -------------------------------------------------------------------------
    # Actor
    # -------------------------------------------------------------------------

    def convert_actor(
        self,
        npc: SourceNPCRecord,
        *,
        imported_at: datetime | None = None,
    ) -> TargetActorDocument:
        """Build the actor document for an NPC.

        Numeric fields are copied as given; nothing is derived or balanced.

        Args:
            npc: Validated source record.
            imported_at: Import timestamp for the provenance flags; now if None.

        Returns:
            The actor document, without items.

        Raises:
            MissingFieldError: If the record has no stats block.
        """
        if npc.stats is None:
            raise MissingFieldError(
                "NPC record has no stats block",
                record_name=npc.name,
                field_name="stats",
            )

        imported_at = imported_at or datetime.now(UTC)
        abilities = {
            abbreviation: AbilityScore(value=score, proficient=self.settings.ability_proficiency)
            for abbreviation, score in npc.stats.by_abbreviation().items()
        }

        return TargetActorDocument(
            name=npc.name,
            img=self.icons.actor_icon(npc.clan, npc.rank),
            system=ActorSystem(
                abilities=abilities,
                attributes=ActorAttributes(
                    hp=Pool(value=npc.hp, max=npc.max_hp),
                    cp=Pool(value=npc.chakra, max=npc.max_chakra),
                    ac=ArmorClass(flat=npc.ac),
                    movement=Movement(walk=npc.speed),
                ),
                details=ActorDetails(
                    biography=Biography(value=biography_html(npc)),
                    type=CreatureType(subtype=npc.rank or "", custom=npc.clan or ""),
                    cr=npc.cr or 0,
                    xp={"value": npc.xp or 0},
                    source={"custom": self.settings.source_label},
                ),
            ),
            flags={
                self.settings.importer_scope: {
                    "source": self.settings.source_tag,
                    "system": self.settings.system_id,
                    "importDate": imported_at.isoformat(),
                    "originalData": npc.to_source_dict(),
                },
                self.settings.provenance_scope: {
                    "clan": npc.clan,
                    "rank": npc.rank,
                    "specialty": npc.specialty,
                    "chakraNatures": list(npc.chakra_natures),
                },
            },
        )

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    async def convert_ability(self, record: SourceItemRecord) -> ConvertedItem:
        """Resolve or synthesize the item document for one source entry.

        Args:
            record: A jutsu, a weapon, or a free-text ability.

        Returns:
            The document and its report line. Reused documents report the
            origin they were found in; synthesized ones report "created".
        """
        if isinstance(record, str):
            record = FreeTextAbility.parse(record)

        if isinstance(record, FreeTextAbility):
            return ConvertedItem(
                document=self.synthesize_feature(record),
                entry=self._created_entry(record.name, SourceKind.FEAT),
            )

        if isinstance(record, SourceAbilityRecord):
            kind, source_kind = ItemKind.SPELL, SourceKind.JUTSU
        else:
            kind, source_kind = ItemKind.WEAPON, SourceKind.WEAPON

        found = await self.index.find(record.name, kind)
        if found is not None:
            logger.debug("Reusing existing item", name=record.name, origin=found.origin)
            return ConvertedItem(
                document=self._clone(found, record),
                entry=ImportReportEntry(
                    name=record.name,
                    kind=source_kind,
                    origin=found.origin,
                    outcome=ReportOutcome.REUSED,
                ),
            )

        document = (
            self.synthesize_jutsu(record)
            if isinstance(record, SourceAbilityRecord)
            else self.synthesize_weapon(record)
        )
        return ConvertedItem(document=document, entry=self._created_entry(record.name, source_kind))

    def _created_entry(self, name: str, kind: SourceKind) -> ImportReportEntry:
        return ImportReportEntry(
            name=name,
            kind=kind,
            origin=CREATED_ORIGIN,
            outcome=ReportOutcome.CREATED,
        )

    def _clone(
        self,
        found: FoundItem,
        record: SourceAbilityRecord | SourceWeaponRecord,
    ) -> TargetItemDocument:
        """Copy a found document without identity and note where it came from."""
        document = found.document.detached()
        scope = dict(document.flags.get(self.settings.provenance_scope) or {})
        scope["resolved"] = {
            "origin": found.origin,
            "originalData": record.to_source_dict(),
        }
        document.flags[self.settings.provenance_scope] = scope
        return document  # type: ignore[return-value]

    def _provenance(self, key: str, data: dict[str, Any]) -> dict[str, Any]:
        return {self.settings.provenance_scope: {key: data}}

    def synthesize_jutsu(self, jutsu: SourceAbilityRecord) -> SpellDocument:
        """Build a spell document from a jutsu record's free text."""
        target = extract_target(jutsu.effects)
        duration = extract_duration(jutsu.duration)

        return SpellDocument(
            name=jutsu.name,
            img=self.icons.jutsu_icon(
                nature=jutsu.nature,
                keywords=jutsu.keywords,
                clan=jutsu.clan,
            ),
            system=SpellSystem(
                description=Description(value=jutsu_description_html(jutsu)),
                source={"custom": jutsu.clan or ""},
                activation=Activation(type=extract_activation(jutsu.casting_time).value, cost=1),
                duration=Duration(value=duration.value, units=duration.units),
                target=Target(value=target.value, units=target.units, type=target.type),
                range=Range(value=extract_range(jutsu.range), units="ft"),
                ability=governing_ability(jutsu.keywords),
                action_type=classify_action(jutsu.description, jutsu.effects).value,
                damage=Damage(parts=extract_damage_parts(jutsu.effects)),
                save=Save(ability=extract_save_ability(jutsu.description, jutsu.effects)),
                level=rank_to_level(jutsu.rank),
                school=school_for_nature(jutsu.nature),
                properties=extract_properties(jutsu.components, jutsu.duration),
                chakra_cost=jutsu.chakra_cost or 0,
            ),
            flags=self._provenance(
                "jutsu",
                {
                    "rank": jutsu.rank,
                    "keywords": list(jutsu.keywords),
                    "clan": jutsu.clan,
                    "nature": jutsu.nature,
                    "components": list(jutsu.components),
                    "originalData": jutsu.to_source_dict(),
                },
            ),
        )

    def synthesize_weapon(self, weapon: SourceWeaponRecord) -> WeaponDocument:
        """Build a weapon document from a weapon record.

        The damage bonus is not part of the damage parts; it is kept in the
        provenance flags next to the original damage text.
        """
        ability, action_type = attack_profile(weapon.properties)
        normal_range, long_range = extract_weapon_ranges(weapon.properties)
        damage = extract_weapon_damage(weapon.damage, weapon.type)

        return WeaponDocument(
            name=weapon.name,
            img=self.icons.weapon_icon(weapon.type or weapon.name),
            system=WeaponSystem(
                description=Description(value=paragraph_html(weapon.description)),
                activation=Activation(type="action", cost=1),
                target=Target(value=1, type="creature"),
                range=Range(value=normal_range, long=long_range, units="ft"),
                ability=ability,
                action_type=action_type.value,
                damage=Damage(parts=damage.parts),
                type=WeaponType(value=weapon_category(weapon.type)),
                properties=extract_weapon_flags(weapon.properties),
            ),
            flags=self._provenance(
                "weapon",
                {
                    "originalType": weapon.type,
                    "originalProperties": list(weapon.properties),
                    "traits": list(weapon.traits),
                    "damageBonus": damage.bonus,
                    "originalData": weapon.to_source_dict(),
                },
            ),
        )

    def synthesize_feature(self, ability: FreeTextAbility) -> FeatDocument:
        return FeatDocument(
            name=ability.name,
            img=self.icons.feature_icon(ability.name),
            system=FeatSystem(description=Description(value=paragraph_html(ability.description))),
            flags=self._provenance("ability", {"originalText": ability.text}),
        )


__all__ = [
    "SourceItemRecord",
    "ConvertedItem",
    "NPCConverter",
]
