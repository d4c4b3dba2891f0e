"""
Tests for the table registry.
"""

import pytest
from flipout.server.manager import TableManager


class TestTableManager:
    """Creating, finding and dropping rooms."""

    def test_auto_ids(self):
        manager = TableManager()
        assert manager.create_table().table_id == "table-1"
        assert manager.create_table().table_id == "table-2"
        assert len(manager) == 2

    def test_duplicate_id(self):
        manager = TableManager()
        manager.create_table(table_id="felt")
        with pytest.raises(ValueError):
            manager.create_table(table_id="felt")

    def test_remove_returns_room(self):
        manager = TableManager()
        room = manager.create_table()
        assert manager.remove_table(room.table_id) is room
        assert manager.remove_table(room.table_id) is None

    def test_last_leave_drops_transient_room(self):
        manager = TableManager()
        room = manager.get_or_create("felt")
        assert room.transient
        room.connections["conn-1"] = object()
        room.connections["conn-2"] = object()

        manager.leave(room, "conn-1")
        assert manager.get_room("felt") is room
        manager.leave(room, "conn-2")
        assert manager.get_room("felt") is None

    def test_leave_keeps_created_room(self):
        manager = TableManager()
        room = manager.create_table(table_id="felt")
        room.connections["conn-1"] = object()
        manager.leave(room, "conn-1")
        assert manager.get_room("felt") is room

    def test_leave_never_drops_replacement(self):
        manager = TableManager()
        old = manager.get_or_create("felt")
        old.connections["conn-1"] = object()
        manager.remove_table("felt")
        new = manager.get_or_create("felt")

        manager.leave(old, "conn-1")
        assert manager.get_room("felt") is new
