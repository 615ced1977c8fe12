"""Default icon tables for the n5eb system.

Keys are matched as described in :mod:`npc_importer.assets.resolver`; dict
order is match order wherever a chain scans a table.
"""

ICON_ROOT = "systems/n5eb/assets/Icons & Images/Icons"


def _icon(filename: str) -> str:
    return f"{ICON_ROOT}/{filename}"


# =============================================================================
# Jutsu Icons
# =============================================================================

JUTSU_NATURE_ICONS = {
    "Fire": _icon("Fire.png"),
    "Water": _icon("Water.png"),
    "Wind": _icon("Wind.png"),
    "Earth": _icon("Earth.png"),
    "Lightning": _icon("Lightning.png"),
    "Wood": _icon("Wood.png"),
    "Ice": _icon("Lunar Slayer.webp"),
    "Lava": _icon("Typhoon Release.png"),
    "Scorch": _icon("Scorch.png"),
    "Boil": _icon("Boil Release.png"),
    "Storm": _icon("Swift.png"),
    "Explosive": _icon("Explosive Release.png"),
    "Dark": _icon("Dark Release.png"),
}

JUTSU_KEYWORD_ICONS = {
    "Ninjutsu": _icon("NonElemental.png"),
    "Taijutsu": _icon("Taijutsu.png"),
    "Genjutsu": _icon("Genjutsu.png"),
    "Hijutsu": _icon("Non Elemental.png"),
    "Kinjutsu": _icon("Toxic.png"),
    "Fuinjutsu": _icon("Matrix.jpg"),
    "Senjutsu": _icon("Sage_Mode.webp"),
    "Medical": _icon("Medical.png"),
    "Bukijutsu": _icon("Bukijutsu.png"),
}

JUTSU_CLAN_ICONS: dict[str, str] = {}
"""Empty by default; clan is the third step of the jutsu chain."""

JUTSU_DEFAULT_ICON = _icon("Jujutsu Sorcerer.webp")


# =============================================================================
# Weapon Icons
# =============================================================================

WEAPON_ICONS = {
    "Kunai": _icon("Bukijutsu.png"),
    "Shuriken": _icon("Bukijutsu.png"),
    "Fuma-Shuriken": _icon("Bukijutsu.png"),
    "Senbon": _icon("Bukijutsu.png"),
    "Katana": _icon("Bukijutsu.png"),
    "Tanto": _icon("Bukijutsu.png"),
    "Wakizashi": _icon("Bukijutsu.png"),
    "Naginata": _icon("Bukijutsu.png"),
    "Bo Staff": _icon("Bukijutsu.png"),
    "Kusarigama": _icon("Bukijutsu.png"),
}

WEAPON_DEFAULT_ICON = _icon("Bukijutsu.png")


# =============================================================================
# Actor Portraits
# =============================================================================

ACTOR_CLAN_ICONS = {
    "Aburame": _icon("Jinchuuriki.jpg"),
    "Uchiha": _icon("Mangekyo Sharingan.webp"),
    "Hyuga": _icon("Otsutsuki.png"),
    "Nara": _icon("Shadow_Clone.webp"),
    "Shakuton": _icon("Scorch.png"),
}

ACTOR_RANK_ICONS = {
    "Genin": _icon("NonElemental.png"),
    "Chunin": _icon("Jujutsu Sorcerer.webp"),
    "Jonin": _icon("inner-gates.jpg"),
    "ANBU": _icon("Shadow_Clone.webp"),
    "Kage": _icon("7th-inner-gate.jpg"),
}

ACTOR_DEFAULT_ICON = "icons/svg/mystery-man.svg"


# =============================================================================
# Feature Icons
# =============================================================================

FEATURE_PATTERN_ICONS = {
    "Chakra": _icon("NonElemental.png"),
    "Byakugan": _icon("Otsutsuki.png"),
    "Sharingan": _icon("Mangekyo Sharingan.webp"),
    "Rinnegan": _icon("Otsutsuki.png"),
    "Sage Mode": _icon("Sage_Mode.webp"),
    "Kekkei Genkai": _icon("Non Elemental.png"),
    "Inner Gate": _icon("inner-gates.jpg"),
    "Eight Gates": _icon("7th-inner-gate.jpg"),
}

FEATURE_DEFAULT_ICON = _icon("NonElemental.png")
