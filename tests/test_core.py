"""Tests for core helpers: Mut, Ref, identity, empty and clone."""

from beaut import Mut, Ref, Some, clone, empty, identity


class TestCells:
    """Tests for Mut and Ref."""

    def test_mut_is_writable(self):
        """Mut holds a single writable value."""
        cell = Mut(1)
        cell.value = 2
        assert cell.value == 2

    def test_ref_reads_through(self):
        """Ref reflects later writes to its cell."""
        cell = Mut([1])
        ref = Ref(cell)
        cell.value = [1, 2]
        assert ref.value == [1, 2]

    def test_ref_equality(self):
        """Refs compare by current content."""
        assert Ref(Mut(1)) == Ref(Mut(1))
        assert Ref(Mut(1)) != Ref(Mut(2))

    def test_ref_repr(self):
        """repr shows the viewed value."""
        assert repr(Ref(Mut('a'))) == "Ref('a')"


class TestFunctions:
    """Tests for identity and empty."""

    def test_identity(self):
        """identity returns its argument."""
        marker = object()
        assert identity(marker) is marker

    def test_empty(self):
        """empty accepts anything and returns None."""
        assert empty() is None
        assert empty(1, 2, key='value') is None


class TestClone:
    """Tests for clone()."""

    def test_clone_is_deep(self):
        """clone() returns an independent deep copy."""
        original = {'items': [1, 2]}
        copied = clone(original).unwrap()
        copied['items'].append(3)
        assert original == {'items': [1, 2]}

    def test_clone_failure_is_err(self):
        """Values that refuse copying come back as Err."""
        result = clone(Some(1))
        assert result.is_err()
        assert isinstance(result.unwrap_err(), TypeError)

    def test_clone_unpicklable_object(self):
        """A generator cannot be deep-copied."""
        gen = (x for x in range(3))
        assert isinstance(clone(gen).unwrap_err(), TypeError)
