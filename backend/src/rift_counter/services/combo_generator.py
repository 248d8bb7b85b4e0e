"""Skill combo suggestions."""
from typing import Optional

from rift_counter.models.champion import Champion, RoleTag
from rift_counter.models.tactics import SkillCombo
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.tactics_generator import ROLE_TAG_PRECEDENCE

ROLE_TAG_COMBOS: dict[RoleTag, SkillCombo] = {
    RoleTag.ASSASSIN: SkillCombo(
        name="Burst Combo",
        sequence="Gap closer > CC > Full rotation > Escape",
        description="Standard burst assassination combo",
        timing="When enemy is isolated",
        difficulty="medium",
        damage="lethal",
    ),
    RoleTag.MAGE: SkillCombo(
        name="Poke Pattern",
        sequence="Long range ability > Auto attack if safe",
        description="Safe poke to whittle enemy down",
        timing="When abilities are available",
        difficulty="easy",
        damage="medium",
    ),
    RoleTag.FIGHTER: SkillCombo(
        name="Extended Trade",
        sequence="Engage > Full rotation > Auto weave > Disengage",
        description="Win extended trades with ability weaving",
        timing="When enemy key ability is down",
        difficulty="medium",
        damage="high",
    ),
    RoleTag.MARKSMAN: SkillCombo(
        name="Auto Reset Trade",
        sequence="Auto > Ability > Auto > Step back",
        description="Weave abilities between autos and kite out",
        timing="When the enemy walks up to last-hit",
        difficulty="easy",
        damage="medium",
    ),
    RoleTag.TANK: SkillCombo(
        name="Engage Chain",
        sequence="Gap closer > Hard CC > Follow-up CC",
        description="Chain crowd control so your team can follow",
        timing="When your team is in range to follow up",
        difficulty="easy",
        damage="low",
    ),
    RoleTag.SUPPORT: SkillCombo(
        name="Lane Pressure",
        sequence="CC on enemy carry > Auto > Peel",
        description="Set up your carry's damage, then protect them",
        timing="When the enemy support is out of position",
        difficulty="easy",
        damage="low",
    ),
}

GENERIC_COMBO = SkillCombo(
    name="Basic Trade",
    sequence="Ability > Auto attack > Back off",
    description="Short trade while the enemy is on cooldown",
    timing="When enemy abilities are down",
    difficulty="easy",
    damage="low",
)


class ComboGenerator:
    """Looks combos up per champion, falling back to role-tag patterns."""

    def __init__(self, store: Optional[KnowledgeStore] = None):
        self.store = store

    def generate_skill_combos(self, champion: Champion) -> list[SkillCombo]:
        capability = self.store.get_capability(champion.id) if self.store else None
        if capability is not None and capability.combos:
            return list(capability.combos)

        combos = [ROLE_TAG_COMBOS[tag] for tag in ROLE_TAG_PRECEDENCE if champion.has_tag(tag)]
        return combos or [GENERIC_COMBO]
