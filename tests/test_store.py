"""Tests for cuervo.profiles.store."""
import pytest

from cuervo.profiles.schemas import Profile, ProfileData
from cuervo.profiles.store import (
    ById,
    ByIndex,
    Choose,
    CollapseAll,
    Insert,
    ProfileStore,
    Remove,
    SetAll,
    ToggleExpanded,
    UpdateData,
    UpdateMeta,
    locator_for,
    reduce,
)


def _p(id=None, chosen=False, title="", **data):
    return Profile(id=id, title=title, chosen=chosen, data=ProfileData(**data))


def _chosen_ids(state):
    return [p.id for p in state if p.chosen]


class TestChoose:
    def test_switches_chosen_profile(self):
        state = (_p("a", chosen=True), _p("b"))
        new = reduce(state, Choose(ById("b")))
        assert [(p.id, p.chosen) for p in new] == [("a", False), ("b", True)]

    def test_is_idempotent(self):
        state = (_p("a", chosen=True), _p("b"), _p("c"))
        once = reduce(state, Choose(ById("c")))
        twice = reduce(once, Choose(ById("c")))
        assert once == twice

    def test_exactly_one_chosen_after_every_choose(self):
        state = (_p("a"), _p("b"), _p(), _p("c"))
        for loc in [ById("a"), ById("c"), ByIndex(2), ById("b"), ById("b"), ByIndex(2)]:
            state = reduce(state, Choose(loc))
            assert sum(p.chosen for p in state) == 1

    def test_empty_collection_stays_empty(self):
        assert reduce((), Choose(ById("a"))) == ()

    def test_unmatched_locator_keeps_current_choice(self):
        state = (_p("a", chosen=True), _p("b"))
        assert reduce(state, Choose(ById("zzz"))) is state

    def test_index_never_targets_persisted_profile(self):
        state = (_p("a", chosen=True), _p("b"))
        assert _chosen_ids(reduce(state, Choose(ByIndex(1)))) == ["a"]

    def test_draft_can_be_chosen_by_index(self):
        state = (_p("a", chosen=True), _p())
        new = reduce(state, Choose(ByIndex(1)))
        assert [p.chosen for p in new] == [False, True]


class TestRemove:
    def test_removes_single_draft_by_index(self):
        assert reduce((_p(),), Remove(ByIndex(0))) == ()

    def test_removes_persisted_by_id(self):
        state = (_p("a"), _p("b"), _p("c"))
        assert [p.id for p in reduce(state, Remove(ById("b")))] == ["a", "c"]

    def test_second_of_two_drafts(self):
        state = (_p(title="one"), _p(title="two"))
        assert [p.title for p in reduce(state, Remove(ByIndex(1)))] == ["one"]

    def test_removing_chosen_is_not_arbitrated(self):
        state = (_p("a", chosen=True), _p("b"))
        assert _chosen_ids(reduce(state, Remove(ById("a")))) == []

    def test_stale_remove_is_noop(self):
        state = (_p("a"),)
        assert reduce(state, Remove(ById("gone"))) == state


class TestUpdate:
    def test_data_update_on_draft_touches_only_that_index(self):
        state = (_p(full_name="x"), _p(full_name="y"), _p(full_name="z"))
        new = reduce(state, UpdateData(ByIndex(2), ProfileData(full_name="Zoe")))
        assert [p.data.full_name for p in new] == ["x", "y", "Zoe"]

    def test_data_update_merges_partial(self):
        state = (_p("a", full_name="Ana", rh="O+"),)
        new = reduce(state, UpdateData(ById("a"), ProfileData(emergency_name="Luis")))
        assert new[0].data.full_name == "Ana"
        assert new[0].data.rh.value == "O+"
        assert new[0].data.emergency_name == "Luis"

    def test_meta_update_keeps_id_and_chosen(self):
        state = (_p("a", chosen=True, title="old"),)
        new = reduce(state, UpdateMeta(ById("a"), "title", "new"))
        assert (new[0].id, new[0].chosen, new[0].title) == ("a", True, "new")

    def test_meta_update_description(self):
        state = (_p(),)
        assert reduce(state, UpdateMeta(ByIndex(0), "description", "work"))[0].description == "work"

    def test_unknown_meta_field_is_ignored(self):
        state = (_p("a"),)
        assert reduce(state, UpdateMeta(ById("a"), "chosen", "yes")) is state

    def test_index_does_not_hit_persisted_profile(self):
        state = (_p("a", full_name="Ana"),)
        new = reduce(state, UpdateData(ByIndex(0), ProfileData(full_name="Other")))
        assert new[0].data.full_name == "Ana"


class TestCollection:
    def test_set_all_replaces_drafts(self):
        state = reduce((), Insert(Profile.draft()))
        new = reduce(state, SetAll((_p("srv-1", title="Casa"),)))
        assert [p.id for p in new] == ["srv-1"]

    def test_insert_appends(self):
        state = (_p("a"),)
        assert len(reduce(state, Insert(_p()))) == 2

    def test_toggle_and_collapse(self):
        state = reduce((_p("a"), _p()), ToggleExpanded(ByIndex(1)))
        assert [p.expanded for p in state] == [False, True]
        assert [p.expanded for p in reduce(state, CollapseAll())] == [False, False]

    def test_unknown_command_returns_state(self):
        state = (_p("a"),)
        assert reduce(state, object()) is state


def test_locator_for():
    assert locator_for(_p("a"), 3) == ById("a")
    assert locator_for(_p(), 3) == ByIndex(3)


class TestProfileStore:
    @pytest.fixture
    def store(self):
        return ProfileStore()

    def test_add_draft_collapses_others(self, store):
        store.load([_p("a").model_copy(update={"expanded": True})])
        store.add_draft()
        assert [p.expanded for p in store.profiles] == [False, True]
        assert store.profiles[1].is_draft
        assert store.profiles[1].data.full_name == ""

    def test_find_and_chosen(self, store):
        store.load([_p("a"), _p("b", chosen=True)])
        assert store.find("a").id == "a"
        assert store.find("nope") is None
        assert store.chosen.id == "b"
