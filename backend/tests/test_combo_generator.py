"""Tests for skill combo lookup."""
from unittest.mock import MagicMock

from rift_counter.models.champion import Champion, RoleTag
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.combo_generator import GENERIC_COMBO, ROLE_TAG_COMBOS, ComboGenerator


def test_role_tag_combos_cover_every_tag():
    assert set(ROLE_TAG_COMBOS) == set(RoleTag)


def test_capability_combos_take_priority():
    generator = ComboGenerator(KnowledgeStore())
    zed = Champion.from_dict({"id": "zed", "tags": ["assassin"]})
    combos = generator.generate_skill_combos(zed)
    assert combos[0].name == "Shadow Burst"
    assert ROLE_TAG_COMBOS[RoleTag.ASSASSIN] not in combos


def test_tag_fallback_in_precedence_order():
    store = MagicMock()
    store.get_capability.return_value = None
    generator = ComboGenerator(store)
    champion = Champion.from_dict({"id": "garen", "tags": ["tank", "fighter"]})
    assert generator.generate_skill_combos(champion) == [
        ROLE_TAG_COMBOS[RoleTag.FIGHTER],
        ROLE_TAG_COMBOS[RoleTag.TANK],
    ]


def test_generic_fallback_without_tags():
    generator = ComboGenerator()
    assert generator.generate_skill_combos(Champion.from_dict({"id": "blank"})) == [GENERIC_COMBO]
