"""Tests for the workspace-level service."""

import pytest

from file_focus.core.file_focus import FileFocus
from file_focus.domain.value_objects import FileKind
from file_focus.exceptions import DuplicateGroupError, FileFocusError, GroupNotFoundError
from file_focus.models.config import Config


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "guide.md").write_text("guide")
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("app")
    (root / "src" / "util.py").write_text("util")
    return root.resolve()


@pytest.fixture
def config(workspace):
    return Config(root_path=workspace)


async def open_focus(config, **kwargs):
    return await FileFocus(config, **kwargs).open()


class TestGroups:

    @pytest.mark.asyncio
    async def test_create_and_find(self, config):
        focus = await open_focus(config)
        try:
            group = await focus.create_group("  Docs ")

            assert group.name == "Docs"
            assert focus.find_group("docs") is group
            assert focus.find_group(group.id) is group
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, config):
        focus = await open_focus(config)
        try:
            with pytest.raises(FileFocusError):
                await focus.create_group("   ")
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, config):
        focus = await open_focus(config)
        try:
            await focus.create_group("Docs")
            with pytest.raises(DuplicateGroupError):
                await focus.create_group("DOCS")
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_unknown_group(self, config):
        focus = await open_focus(config)
        try:
            with pytest.raises(GroupNotFoundError):
                focus.find_group("nothing")
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_rename(self, config):
        focus = await open_focus(config)
        try:
            group = await focus.create_group("Docs")
            await focus.create_group("Code")

            await focus.rename_group("docs", "DOCS")
            assert group.name == "DOCS"

            with pytest.raises(DuplicateGroupError):
                await focus.rename_group("docs", "code")
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_groups_in_display_order(self, config):
        focus = await open_focus(config)
        try:
            for name in ("zeta", "Alpha", "beta"):
                await focus.create_group(name)

            assert [g.name for g in focus.groups()] == ["Alpha", "beta", "zeta"]
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_delete_pinned_group_persists_unpin(self, config):
        focus = await open_focus(config)
        try:
            group = await focus.create_group("Docs")
            await focus.pin_group("Docs")
            await focus.delete_group("Docs")
        finally:
            focus.close()

        reopened = await open_focus(config)
        try:
            assert reopened.store.lookup(group.id) is None
            assert reopened.store.pinned_group_id is None
        finally:
            reopened.close()


class TestPinning:

    @pytest.mark.asyncio
    async def test_pin_empty_group_survives_restart(self, config):
        focus = await open_focus(config)
        try:
            group = await focus.create_group("Empty")
            pinned = await focus.pin_group("Empty")

            assert pinned is group
            assert focus.store.pinned_group_id == group.id
        finally:
            focus.close()

        reopened = await open_focus(config)
        try:
            assert reopened.store.pinned_group_id == group.id
        finally:
            reopened.close()

    @pytest.mark.asyncio
    async def test_pinning_replaces_previous_pin(self, config):
        focus = await open_focus(config)
        try:
            first = await focus.create_group("First", ["docs"])
            second = await focus.create_group("Second")

            await focus.pin_group("First")
            await focus.pin_group("Second")

            assert focus.store.is_pinned(second.id)
            assert not focus.store.is_pinned(first.id)
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_clear_pin(self, config):
        focus = await open_focus(config)
        try:
            await focus.create_group("Docs")
            await focus.pin_group("Docs")

            assert await focus.pin_group(None) is None
            assert focus.store.pinned_group_id is None
        finally:
            focus.close()


class TestResources:

    @pytest.mark.asyncio
    async def test_add_normalizes_against_root(self, config, workspace):
        focus = await open_focus(config)
        try:
            await focus.create_group("Docs")
            added = await focus.add_resources("Docs", ["docs/guide.md", "./docs/../docs/guide.md"])

            assert added == [str(workspace / "docs" / "guide.md")]
            assert focus.find_group("Docs").resources == added
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_remove(self, config, workspace):
        focus = await open_focus(config)
        try:
            await focus.create_group("Code", ["src/app.py", "src/util.py"])

            removed = await focus.remove_resources("Code", ["src/app.py", "src/missing.py"])

            assert removed == [str(workspace / "src" / "app.py")]
            assert focus.find_group("Code").resources == [str(workspace / "src" / "util.py")]
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_changes_survive_restart(self, config, workspace):
        focus = await open_focus(config)
        try:
            await focus.create_group("Docs")
            await focus.add_resources("Docs", ["docs", "src/app.py"])
            await focus.pin_group("Docs")
        finally:
            focus.close()

        reopened = await open_focus(config)
        try:
            group = reopened.find_group("Docs")
            assert group.resources == [str(workspace / "docs"), str(workspace / "src" / "app.py")]
            assert reopened.store.pinned_group_id == group.id
        finally:
            reopened.close()

    @pytest.mark.asyncio
    async def test_mutations_refresh_tree(self, config):
        focus = await open_focus(config)
        events = []
        focus.projector.on_did_change_tree_data(events.append)
        try:
            await focus.create_group("Docs")
            await focus.add_resources("Docs", ["docs"])
            await focus.add_resources("Docs", ["docs"])
            await focus.pin_group(None)
        finally:
            focus.close()

        assert len(events) == 3


class TestTree:

    @pytest.mark.asyncio
    async def test_tree_against_real_filesystem(self, config, workspace):
        focus = await open_focus(config)
        try:
            await focus.create_group("Mixed", ["src", "docs/guide.md", "gone.txt"])
            projector = focus.projector

            [group_node] = await projector.get_children()
            members = await projector.get_children(group_node)

            assert [(n.label, n.kind) for n in members] == [
                ("gone.txt", FileKind.UNKNOWN),
                ("guide.md", FileKind.FILE),
                ("src", FileKind.DIRECTORY),
            ]

            src = members[2]
            children = await projector.get_children(src)
            assert sorted(n.label for n in children) == ["app.py", "util.py"]
            assert not any(n.is_root_member for n in children)
        finally:
            focus.close()


class TestMove:

    @pytest.mark.asyncio
    async def test_move_between_groups(self, config, workspace):
        focus = await open_focus(config)
        try:
            docs = await focus.create_group("Docs", ["docs/guide.md", "src/app.py"])
            code = await focus.create_group("Code")

            result = await focus.move_resources(["src/app.py"], "Docs", "Code")

            app = str(workspace / "src" / "app.py")
            assert result.moved == [(app, docs.id)]
            assert not docs.contains(app)
            assert code.resources == [app]
        finally:
            focus.close()

        reopened = await open_focus(config)
        try:
            assert reopened.find_group("Code").resources == [app]
            assert app not in reopened.find_group("Docs").resources
        finally:
            reopened.close()

    @pytest.mark.asyncio
    async def test_move_unlisted_resource_does_nothing(self, config):
        focus = await open_focus(config)
        try:
            await focus.create_group("Docs", ["docs/guide.md"])
            await focus.create_group("Code")

            result = await focus.move_resources(["src/util.py"], "Docs", "Code")

            assert result.moved_count == 0
            assert result.target_group_id is None
            assert focus.find_group("Code").resources == []
        finally:
            focus.close()

    @pytest.mark.asyncio
    async def test_move_to_same_group(self, config):
        focus = await open_focus(config)
        try:
            docs = await focus.create_group("Docs", ["docs/guide.md"])

            result = await focus.move_resources(["docs/guide.md"], "Docs", "docs")

            assert result.moved_count == 0
            assert result.dirty_group_ids == set()
            assert len(docs) == 1
        finally:
            focus.close()
