"""Target documents written to the game-content store.

Field names are snake_case in Python and serialize to the store's camelCase
schema with ``model_dump(by_alias=True)``. Every model allows extra fields:
documents fetched from a store or library keep keys this package does not
model, so a reused item is attached exactly as it was found.

Items are a discriminated union on ``type``:

    >>> from npc_importer.models.documents import item_adapter
    >>> item = item_adapter.validate_python({"name": "Kunai", "type": "weapon"})
    >>> item.kind
    <ItemKind.WEAPON: 'weapon'>
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from npc_importer.models.enums import ItemKind


class DocumentModel(BaseModel):
    """Base for every store document fragment."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_store(self) -> dict[str, Any]:
        """Serialize with the store's field names."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Shared Item Components
# =============================================================================


class Description(DocumentModel):
    value: str = ""
    chat: str = ""


class Activation(DocumentModel):
    type: str = ""
    cost: int | None = None
    condition: str = ""


class Duration(DocumentModel):
    value: str = ""
    units: str = ""


class Target(DocumentModel):
    """Area or creature count an item affects."""

    value: int | str | None = None
    width: int | None = None
    units: str = ""
    type: str = ""
    prompt: bool = True


class Range(DocumentModel):
    value: int | None = None
    long: int | None = None
    units: str = ""


class Damage(DocumentModel):
    """Damage formula parts as ``(dice, damage type)`` pairs."""

    parts: list[tuple[str, str]] = Field(default_factory=list)
    versatile: str = ""


class Save(DocumentModel):
    ability: str = ""
    dc: int | None = None
    scaling: str = "spell"


class Recharge(DocumentModel):
    value: int | None = None
    formula: str = "1d8"
    charged: bool = False


class ItemSystem(DocumentModel):
    """Fields common to spells, weapons and features."""

    description: Description = Field(default_factory=Description)
    source: dict[str, Any] = Field(default_factory=dict)
    activation: Activation = Field(default_factory=Activation)
    duration: Duration = Field(default_factory=Duration)
    target: Target = Field(default_factory=Target)
    range: Range = Field(default_factory=Range)
    ability: str | None = None
    action_type: str | None = None
    damage: Damage = Field(default_factory=Damage)
    formula: str = ""
    save: Save = Field(default_factory=Save)
    recharge: Recharge = Field(default_factory=Recharge)


# =============================================================================
# Item Systems
# =============================================================================


class Preparation(DocumentModel):
    mode: str = "innate"
    prepared: bool = True


class ChakraScaling(DocumentModel):
    """Chakra cost scaling. Imports never infer a scaling."""

    mode: str = "none"
    value: int = 0


class SpellSystem(ItemSystem):
    """Spell-like ability (jutsu) fields."""

    level: int = 1
    school: str = ""
    properties: list[str] = Field(default_factory=list)
    preparation: Preparation = Field(default_factory=Preparation)
    chakra_cost: int | str = 0
    chakra_scaling: ChakraScaling = Field(default_factory=ChakraScaling)


class WeaponType(DocumentModel):
    value: str = ""
    base_item: str = ""


class WeaponSystem(ItemSystem):
    """Weapon fields."""

    quantity: int = 1
    equipped: bool = True
    identified: bool = True
    type: WeaponType = Field(default_factory=WeaponType)
    properties: list[str] = Field(default_factory=list)
    proficient: int | None = 1


class FeatType(DocumentModel):
    value: str = "monster"
    subtype: str = ""


class FeatSystem(ItemSystem):
    """Feature (special ability) fields."""

    type: FeatType = Field(default_factory=FeatType)
    requirements: str = ""
    properties: list[str] = Field(default_factory=list)


# =============================================================================
# Item Documents
# =============================================================================


class ItemDocument(DocumentModel):
    """Common item document envelope.

    Attributes:
        id: Persistent identity in the store (``_id``); None for new documents.
        name: Display name, compared through the normalizer.
        img: Icon path.
        flags: Module-scoped metadata, including provenance.
    """

    id: str | None = Field(default=None, alias="_id")
    name: str
    img: str = ""
    flags: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> ItemKind:
        return ItemKind(self.type)  # type: ignore[attr-defined]

    def detached(self) -> "ItemDocument":
        """Return a deep copy without persistent identity."""
        return self.model_copy(update={"id": None}, deep=True)


class SpellDocument(ItemDocument):
    type: Literal["spell"] = "spell"
    system: SpellSystem = Field(default_factory=SpellSystem)


class WeaponDocument(ItemDocument):
    type: Literal["weapon"] = "weapon"
    system: WeaponSystem = Field(default_factory=WeaponSystem)


class FeatDocument(ItemDocument):
    type: Literal["feat"] = "feat"
    system: FeatSystem = Field(default_factory=FeatSystem)


TargetItemDocument = Annotated[
    SpellDocument | WeaponDocument | FeatDocument,
    Field(discriminator="type"),
]
"""Any item document, selected by its ``type``."""

item_adapter: TypeAdapter[TargetItemDocument] = TypeAdapter(TargetItemDocument)
item_list_adapter: TypeAdapter[list[TargetItemDocument]] = TypeAdapter(list[TargetItemDocument])


# =============================================================================
# Actor Document
# =============================================================================


class AbilityScore(DocumentModel):
    value: int
    proficient: float = 0.5
    max: int | None = None
    bonuses: dict[str, str] = Field(default_factory=lambda: {"check": "", "save": ""})


class Pool(DocumentModel):
    """A current/maximum resource such as hit points or chakra points."""

    value: int | None = None
    max: int | None = None
    temp: int = 0
    tempmax: int = 0
    bonuses: dict[str, Any] = Field(default_factory=dict)
    formula: str = ""


class ArmorClass(DocumentModel):
    flat: int | None = None
    calc: str = "flat"
    prof: int | None = None


class Movement(DocumentModel):
    walk: int | None = None
    burrow: int | None = None
    climb: int | None = None
    fly: int | None = None
    swim: int | None = None
    units: str | None = None
    hover: bool = False


class ActorAttributes(DocumentModel):
    hp: Pool = Field(default_factory=Pool)
    cp: Pool = Field(default_factory=Pool)
    ac: ArmorClass = Field(default_factory=ArmorClass)
    movement: Movement = Field(default_factory=Movement)
    spellcasting: dict[str, str] = Field(
        default_factory=lambda: {"ninjutsu": "int", "genjutsu": "wis", "taijutsu": "str"}
    )


class Biography(DocumentModel):
    value: str = ""
    public: str = ""


class CreatureType(DocumentModel):
    value: str = "custom"
    subtype: str = ""
    swarm: str = ""
    custom: str = ""


class ActorDetails(DocumentModel):
    biography: Biography = Field(default_factory=Biography)
    type: CreatureType = Field(default_factory=CreatureType)
    cr: int | float | str = 0
    spell_level: int = 0
    xp: dict[str, int] = Field(default_factory=lambda: {"value": 0})
    source: dict[str, str] = Field(default_factory=dict)
    alignment: str = ""


class ActorSystem(DocumentModel):
    abilities: dict[str, AbilityScore] = Field(default_factory=dict)
    attributes: ActorAttributes = Field(default_factory=ActorAttributes)
    details: ActorDetails = Field(default_factory=ActorDetails)
    traits: dict[str, Any] = Field(default_factory=lambda: {"size": "med"})
    currency: dict[str, int] = Field(default_factory=lambda: {"ryo": 0})


class TargetActorDocument(DocumentModel):
    """An NPC actor ready for persistence."""

    name: str
    type: Literal["npc"] = "npc"
    img: str = ""
    system: ActorSystem = Field(default_factory=ActorSystem)
    flags: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    # Shared components
    "DocumentModel",
    "Description",
    "Activation",
    "Duration",
    "Target",
    "Range",
    "Damage",
    "Save",
    "Recharge",
    "ItemSystem",
    # Item systems
    "Preparation",
    "ChakraScaling",
    "SpellSystem",
    "WeaponType",
    "WeaponSystem",
    "FeatType",
    "FeatSystem",
    # Item documents
    "ItemDocument",
    "SpellDocument",
    "WeaponDocument",
    "FeatDocument",
    "TargetItemDocument",
    "item_adapter",
    "item_list_adapter",
    # Actor document
    "AbilityScore",
    "Pool",
    "ArmorClass",
    "Movement",
    "ActorAttributes",
    "Biography",
    "CreatureType",
    "ActorDetails",
    "ActorSystem",
    "TargetActorDocument",
]
