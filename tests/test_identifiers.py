"""Tests for library and object-kind identifiers."""

import pytest

from refsync_storage import KIND_FOLDERS, LibraryIdentifier, LibraryKind, ObjectKind
from refsync_storage.identifiers import kind_folder


class TestLibraryIdentifier:
    """Tests for LibraryIdentifier."""

    def test_custom_folder_name(self):
        """Personal libraries use the L prefix."""
        assert LibraryIdentifier.custom(1).folder_name == "L1"

    def test_group_folder_name(self):
        """Group libraries use the G prefix."""
        assert LibraryIdentifier.group(12345).folder_name == "G12345"

    def test_same_id_different_kind_distinct(self):
        """A personal and a group library with the same id never share a folder."""
        assert LibraryIdentifier.custom(7).folder_name != LibraryIdentifier.group(7).folder_name

    def test_folder_names_unique(self):
        """Folder names never repeat across ids and kinds."""
        identifiers = [LibraryIdentifier.custom(i) for i in range(50)]
        identifiers += [LibraryIdentifier.group(i) for i in range(50)]
        assert len({i.folder_name for i in identifiers}) == len(identifiers)

    def test_parse_round_trip(self):
        """Folder names parse back to the same identifier."""
        for identifier in (LibraryIdentifier.custom(0), LibraryIdentifier.group(981)):
            assert LibraryIdentifier.from_folder_name(identifier.folder_name) == identifier

    @pytest.mark.parametrize("name", ["", "X1", "L", "G-1", "L1a", "l1"])
    def test_parse_malformed_raises(self, name):
        """Anything but L or G followed by digits is rejected."""
        with pytest.raises(ValueError):
            LibraryIdentifier.from_folder_name(name)

    def test_negative_id_rejected(self):
        """Library ids are non-negative."""
        with pytest.raises(ValueError):
            LibraryIdentifier.group(-1)

    def test_non_int_id_rejected(self):
        """Library ids must be ints."""
        with pytest.raises(ValueError):
            LibraryIdentifier(LibraryKind.CUSTOM, "1")

    def test_hashable_and_equal(self):
        """Equal identifiers hash alike."""
        assert len({LibraryIdentifier.custom(1), LibraryIdentifier.custom(1)}) == 1

    def test_str_is_folder_name(self):
        """str gives the folder name."""
        assert str(LibraryIdentifier.group(3)) == "G3"


class TestObjectKind:
    """Tests for ObjectKind folders."""

    def test_table_covers_every_kind(self):
        """Every kind has a folder."""
        assert set(KIND_FOLDERS) == set(ObjectKind)

    def test_item_and_trash_collapse(self):
        """Trash shares the item folder."""
        assert kind_folder(ObjectKind.ITEM) == kind_folder(ObjectKind.TRASH) == "item"

    def test_other_kinds_use_own_name(self):
        """The remaining kinds use their own name."""
        for kind in (ObjectKind.COLLECTION, ObjectKind.SEARCH, ObjectKind.SETTINGS):
            assert kind_folder(kind) == kind.value
