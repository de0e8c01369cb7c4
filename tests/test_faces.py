"""Tests for edit0r.faces -- colours, faces and the handle-stable registry."""

from __future__ import annotations

import pytest

from edit0r.faces import (
    DEFAULT_FACE,
    DEFAULT_FACE_ID,
    INVALID_FACE,
    Face,
    FaceRegistry,
    parse_color,
)

RED = Face(fg=(255, 0, 0))
GREEN = Face(fg=(0, 255, 0))
BLUE = Face(fg=(0, 0, 255))


class TestParseColor:
    def test_default_and_none(self) -> None:
        assert parse_color("default") == "default"
        assert parse_color(None) == "default"

    def test_long_hex(self) -> None:
        assert parse_color("#ff9600") == (255, 150, 0)

    def test_short_hex(self) -> None:
        assert parse_color("#f0a") == (255, 0, 170)

    def test_triple(self) -> None:
        assert parse_color([1, 2, 3]) == (1, 2, 3)

    @pytest.mark.parametrize("value", ["red", "#12345", [1, 2], [0, 0, 256], [0, -1, 0], [True, 0, 0], 7])
    def test_rejects_invalid(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_color(value)


class TestFace:
    def test_structural_equality(self) -> None:
        assert Face(fg=(1, 2, 3)) == Face(fg=(1, 2, 3), bg="default")
        assert Face() == DEFAULT_FACE

    def test_hashable(self) -> None:
        assert len({Face(), Face(), RED}) == 2


class TestRegistryBasics:
    def test_default_face_is_id_zero(self) -> None:
        registry = FaceRegistry()
        assert registry.lookup_by_name("default") == DEFAULT_FACE_ID
        assert registry.lookup_by_id(DEFAULT_FACE_ID) == DEFAULT_FACE

    def test_error_face_is_registered(self) -> None:
        registry = FaceRegistry()
        error_id = registry.lookup_by_name("error")
        assert error_id is not None
        assert registry.lookup_by_id(error_id) == INVALID_FACE

    def test_register_appends_new_id(self) -> None:
        registry = FaceRegistry()
        size = len(registry)
        face_id = registry.register_or_update("keyword", RED)
        assert face_id == size
        assert registry.lookup_by_id(face_id) == RED

    def test_register_same_name_keeps_id(self) -> None:
        registry = FaceRegistry()
        first = registry.register_or_update("keyword", RED)
        second = registry.register_or_update("keyword", GREEN)
        assert first == second
        assert registry.lookup_by_id(first) == GREEN

    def test_unknown_lookups_return_none(self) -> None:
        registry = FaceRegistry()
        assert registry.lookup_by_name("nope") is None
        assert registry.lookup_by_id(999) is None
        assert registry.lookup_by_id(-1) is None

    def test_fallback_lookups_return_invalid_face(self) -> None:
        registry = FaceRegistry()
        assert registry.face_for_name("nope") == INVALID_FACE
        assert registry.face_for_id(999) == INVALID_FACE

    def test_contains(self) -> None:
        registry = FaceRegistry()
        registry.register_or_update("keyword", RED)
        assert "keyword" in registry
        assert "comment" not in registry


class TestLoadTheme:
    def test_theme_ids_are_theme_managed(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED), ("comment", GREEN)])
        keyword = registry.lookup_by_name("keyword")
        assert keyword is not None
        assert registry.is_theme_managed(keyword)
        assert not registry.is_theme_managed(DEFAULT_FACE_ID)
        assert registry.theme_names() == ["keyword", "comment"]

    def test_loading_same_theme_twice_keeps_ids(self) -> None:
        registry = FaceRegistry()
        theme = [("keyword", RED), ("comment", GREEN), ("string", BLUE)]
        registry.load_theme(theme)
        before = {name: registry.lookup_by_name(name) for name, _ in theme}
        registry.load_theme(theme)
        after = {name: registry.lookup_by_name(name) for name, _ in theme}
        assert before == after
        assert len(registry) == 2 + len(theme)

    def test_shared_name_keeps_id_and_takes_new_face(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED), ("comment", GREEN)])
        comment_id = registry.lookup_by_name("comment")

        registry.load_theme([("string", RED), ("comment", BLUE)])

        assert registry.lookup_by_name("comment") == comment_id
        assert comment_id is not None
        assert registry.lookup_by_id(comment_id) == BLUE

    def test_dropped_name_is_unbound_but_slot_kept(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED), ("comment", GREEN)])
        keyword_id = registry.lookup_by_name("keyword")
        assert keyword_id is not None

        registry.load_theme([("comment", GREEN)])

        assert registry.lookup_by_name("keyword") is None
        assert registry.lookup_by_id(keyword_id) == RED

    def test_vacated_slot_is_reused_by_next_theme(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED), ("comment", GREEN)])
        keyword_id = registry.lookup_by_name("keyword")
        size = len(registry)

        registry.load_theme([("comment", GREEN), ("string", BLUE)])

        assert registry.lookup_by_name("string") == keyword_id
        assert registry.lookup_by_id(keyword_id) == BLUE
        assert len(registry) == size

    def test_larger_theme_allocates_new_slots(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED)])
        size = len(registry)
        registry.load_theme([("keyword", RED), ("comment", GREEN), ("string", BLUE)])
        assert len(registry) == size + 2

    def test_slots_never_shrink(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("a", RED), ("b", GREEN), ("c", BLUE)])
        size = len(registry)
        registry.load_theme([("a", RED)])
        assert len(registry) == size

    def test_default_entry_updates_slot_zero(self) -> None:
        registry = FaceRegistry()
        background = Face(fg=(255, 255, 255), bg=(0, 0, 0))
        registry.load_theme([("default", background), ("keyword", RED)])
        assert registry.lookup_by_name("default") == DEFAULT_FACE_ID
        assert registry.lookup_by_id(DEFAULT_FACE_ID) == background
        assert not registry.is_theme_managed(DEFAULT_FACE_ID)

    def test_permanent_name_not_moved_by_theme(self) -> None:
        registry = FaceRegistry()
        search_id = registry.register_or_update("search", RED)
        registry.load_theme([("search", GREEN), ("keyword", BLUE)])
        assert registry.lookup_by_name("search") == search_id
        assert registry.lookup_by_id(search_id) == GREEN
        assert not registry.is_theme_managed(search_id)

    def test_duplicate_names_share_one_slot(self) -> None:
        registry = FaceRegistry()
        size = len(registry)
        registry.load_theme([("keyword", RED), ("keyword", GREEN)])
        assert len(registry) == size + 1
        assert registry.face_for_name("keyword") == GREEN

    def test_registered_theme_name_updates_in_place(self) -> None:
        registry = FaceRegistry()
        registry.load_theme([("keyword", RED)])
        keyword_id = registry.lookup_by_name("keyword")
        assert registry.register_or_update("keyword", GREEN) == keyword_id
        assert keyword_id is not None
        assert registry.is_theme_managed(keyword_id)
