"""Tests for Result: Ok and Err."""

import copy

import pytest
from hypothesis import given

from beaut import (
    Err,
    Nothing,
    Ok,
    OwnershipViolationError,
    Result,
    Some,
    UnwrapError,
    identity,
)
from tests.strategies import exceptions, int_functions, integers, result_builders, texts


class TestResultCreation:
    """Tests for Ok() and Err()."""

    def test_ok_creation(self):
        """Ok wraps a success value."""
        result = Ok(42)
        assert result.is_ok()
        assert not result.is_err()

    def test_err_creation(self):
        """Err wraps an error value."""
        result = Err('error')
        assert result.is_err()
        assert not result.is_ok()

    def test_err_with_exception(self, sample_err):
        """Err can hold an exception."""
        assert isinstance(sample_err.unwrap_err(), ValueError)

    def test_factories_return_result(self, sample_ok):
        """Both factories build Result instances."""
        assert isinstance(sample_ok, Result)
        assert isinstance(Err(1), Result)

    def test_repr(self):
        """repr shows the variant and payload."""
        assert repr(Ok(3)) == 'Ok(3)'
        assert repr(Err('bad')) == "Err('bad')"

    def test_repr_consumed(self):
        """repr of a consumed result does not raise."""
        result = Ok(1)
        result.unwrap()
        assert repr(result) == '<consumed Result>'


class TestResultOwnership:
    """Tests for consume-once behaviour."""

    def test_consuming_op_invalidates_receiver(self):
        """After map, the original result cannot be used."""
        result = Ok(1)
        result.map(str)
        with pytest.raises(OwnershipViolationError, match='cannot use consumed result'):
            result.is_ok()

    def test_peeks_do_not_consume(self):
        """Peeks can be repeated."""
        result = Err(3)
        assert result.is_err_and(lambda e: e == 3)
        assert result.is_err_and(lambda e: e == 3)
        assert not result.is_ok_and(lambda v: True)
        assert result.unwrap_err() == 3

    def test_drop_moves_value(self):
        """drop() moves the value into a fresh owner."""
        result = Ok(1)
        moved = result.drop()
        assert result.is_consumed()
        assert moved.unwrap() == 1

    def test_deepcopy_is_refused(self):
        """Results cannot be duplicated."""
        with pytest.raises(TypeError, match='cannot be copied'):
            copy.deepcopy(Ok(1))


class TestResultQuerying:
    """Tests for is_ok_and and is_err_and."""

    def test_is_ok_and(self):
        """is_ok_and() tests the Ok value."""
        assert Ok(2).is_ok_and(lambda x: x > 1)
        assert not Ok(0).is_ok_and(lambda x: x > 1)
        assert not Err('hey').is_ok_and(lambda x: x > 1)

    def test_is_err_and(self):
        """is_err_and() tests the Err value."""
        assert Err(KeyError('k')).is_err_and(lambda e: isinstance(e, KeyError))
        assert not Err(ValueError()).is_err_and(lambda e: isinstance(e, KeyError))
        assert not Ok(1).is_err_and(lambda e: True)


class TestResultUnwrap:
    """Tests for unwrap, expect and their Err counterparts."""

    def test_ok_unwrap(self, sample_ok):
        """unwrap() returns the Ok value."""
        assert sample_ok.unwrap() == 42

    def test_err_unwrap_raises(self):
        """unwrap() on Err raises with the error text and carries it."""
        error = ValueError('emergency failure')
        with pytest.raises(UnwrapError, match='emergency failure') as exc_info:
            Err(error).unwrap()
        assert exc_info.value.payload is error

    def test_expect(self):
        """expect() prefixes the caller's message to the error."""
        assert Ok(1).expect('fine') == 1
        with pytest.raises(UnwrapError) as exc_info:
            Err('emergency failure').expect('Testing expect')
        assert str(exc_info.value) == 'Testing expect: emergency failure'

    def test_unwrap_or(self):
        """unwrap_or() falls back to the default."""
        assert Ok(9).unwrap_or(2) == 9
        assert Err('error').unwrap_or(2) == 2

    def test_unwrap_or_else(self):
        """unwrap_or_else() calls the fallback with no arguments."""
        assert Ok(2).unwrap_or_else(lambda: 0) == 2
        assert Err('foo').unwrap_or_else(lambda: 3) == 3

    def test_unwrap_err(self):
        """unwrap_err() returns Err and raises on Ok."""
        assert Err('emergency failure').unwrap_err() == 'emergency failure'
        with pytest.raises(UnwrapError, match='2') as exc_info:
            Ok(2).unwrap_err()
        assert exc_info.value.payload == 2

    def test_expect_err(self):
        """expect_err() prefixes the caller's message to the Ok value."""
        assert Err('e').expect_err('bad') == 'e'
        with pytest.raises(UnwrapError) as exc_info:
            Ok(2).expect_err('bad')
        assert str(exc_info.value) == 'bad: 2'

    def test_into_ok(self):
        """into_ok() unwraps an infallible result."""
        assert Ok(2).into_ok() == 2
        with pytest.raises(UnwrapError, match='into_ok'):
            Err('e').into_ok()

    def test_into_err(self):
        """into_err() unwraps a result that cannot succeed."""
        assert Err(2).into_err() == 2
        with pytest.raises(UnwrapError, match='into_err'):
            Ok('v').into_err()


class TestResultTransforms:
    """Tests for map, and_then and friends."""

    def test_map(self):
        """map() applies to Ok only."""
        assert Ok(2).map(lambda x: x * 2).unwrap() == 4
        assert Err('e').map(lambda x: x * 2).unwrap_err() == 'e'

    def test_map_err(self):
        """map_err() applies to Err only."""
        assert Ok(2).map_err(str).unwrap() == 2
        assert Err(13).map_err(lambda e: f'error code: {e}').unwrap_err() == 'error code: 13'

    def test_map_or(self):
        """map_or() uses the default for Err."""
        assert Ok('foo').map_or(42, len) == 3
        assert Err('bar').map_or(42, len) == 42

    def test_map_or_else(self):
        """map_or_else() passes the error to the default function."""
        assert Ok('foo').map_or_else(lambda e: -1, len) == 3
        assert Err('bar').map_or_else(lambda e: len(e) * 2, len) == 6

    def test_inspect(self):
        """inspect() sees the Ok value only."""
        seen = []
        assert Ok(4).inspect(seen.append).unwrap() == 4
        assert Err('e').inspect(seen.append).unwrap_err() == 'e'
        assert seen == [4]

    def test_inspect_err(self):
        """inspect_err() sees the Err value only."""
        seen = []
        assert Err('e').inspect_err(seen.append).unwrap_err() == 'e'
        assert Ok(4).inspect_err(seen.append).unwrap() == 4
        assert seen == ['e']

    def test_and(self):
        """and_() returns the other result when self is Ok."""
        assert Ok(2).and_(Err('late error')).unwrap_err() == 'late error'
        assert Err('early error').and_(Ok('foo')).unwrap_err() == 'early error'
        assert Err('not a 2').and_(Err('late error')).unwrap_err() == 'not a 2'
        assert Ok(2).and_(Ok('different result type')).unwrap() == 'different result type'

    def test_and_consumes_both(self):
        """and_() consumes both operands."""
        left, right = Err('e'), Ok(1)
        left.and_(right)
        assert left.is_consumed()
        assert right.is_consumed()

    def test_and_then(self):
        """and_then() chains fallible steps."""

        def sq_then_to_string(x):
            return Ok(str(x * x)) if x < 1000 else Err('overflowed')

        assert Ok(2).and_then(sq_then_to_string).unwrap() == '4'
        assert Ok(1_000_000).and_then(sq_then_to_string).unwrap_err() == 'overflowed'
        assert Err('not a number').and_then(sq_then_to_string).unwrap_err() == 'not a number'

    def test_or(self):
        """or_() returns self if Ok, otherwise the other result."""
        assert Ok(2).or_(Err('late error')).unwrap() == 2
        assert Err('early error').or_(Ok(2)).unwrap() == 2
        assert Err('not a 2').or_(Err('late error')).unwrap_err() == 'late error'
        assert Ok(2).or_(Ok(100)).unwrap() == 2

    def test_or_else(self):
        """or_else() passes the error to the fallback."""

        def sq(x):
            return Ok(x * x)

        def err(x):
            return Err(x)

        assert Ok(2).or_else(sq).or_else(sq).unwrap() == 2
        assert Ok(2).or_else(err).or_else(sq).unwrap() == 2
        assert Err(3).or_else(sq).or_else(err).unwrap() == 9
        assert Err(3).or_else(err).or_else(err).unwrap_err() == 3


class TestResultConversions:
    """Tests for ok, err, transpose and flatten."""

    def test_ok(self):
        """ok() keeps the success value."""
        assert Ok(2).ok().unwrap() == 2
        assert Err('nothing here').ok().is_none()

    def test_err(self):
        """err() keeps the error value."""
        assert Ok(2).err().is_none()
        assert Err('nothing here').err().unwrap() == 'nothing here'

    def test_transpose(self):
        """transpose() swaps Result[Option] into Option[Result]."""
        assert Ok(Some(5)).transpose().unwrap().unwrap() == 5
        assert Ok(Nothing()).transpose().is_none()
        assert Err('e').transpose().unwrap().unwrap_err() == 'e'

    def test_transpose_round_trip(self):
        """Transposing twice restores the original shape."""
        assert Ok(Some(5)).transpose().transpose() == Ok(Some(5))
        assert Some(Err('e')).transpose().transpose() == Some(Err('e'))

    def test_flatten(self):
        """flatten() removes one level of nesting."""
        assert Ok(Ok('hello')).flatten().unwrap() == 'hello'
        assert Ok(Err(6)).flatten().unwrap_err() == 6
        assert Err(6).flatten().unwrap_err() == 6


class TestResultReferences:
    """Tests for as_ref and as_mut."""

    def test_as_ref(self):
        """as_ref() views the payload without consuming."""
        result = Ok(2)
        assert result.as_ref().unwrap().value == 2
        assert Err('e').as_ref().unwrap_err().value == 'e'
        assert result.unwrap() == 2

    def test_as_mut(self):
        """Writes through as_mut() reach the result."""
        result = Ok(2)
        result.as_mut().unwrap().value = 42
        assert result.unwrap() == 42

        failure = Err(13)
        failure.as_mut().unwrap_err().value += 10
        assert failure.unwrap_err() == 23


class TestResultEquality:
    """Tests for eq and ==."""

    def test_equality(self):
        """Same variant and equal payload compare equal."""
        assert Ok(1) == Ok(1)
        assert Err('e') == Err('e')
        assert Ok(1).eq(Ok(1))

    def test_inequality(self):
        """Different payloads or variants compare unequal."""
        assert Ok(1) != Ok(2)
        assert Ok(1) != Err(1)
        assert Err(1) != Ok(1)

    def test_eq_does_not_consume(self):
        """Comparison leaves both sides live."""
        left, right = Err('e'), Err('e')
        assert left == right
        assert left.unwrap_err() == right.unwrap_err()

    def test_unhashable(self):
        """Results are not hashable."""
        with pytest.raises(TypeError):
            hash(Ok(1))


class TestResultObject:
    """Tests for to_object and from_object."""

    def test_to_object(self):
        """to_object() returns a plain dict."""
        assert Ok(1).to_object() == {'ok': True, 'value': 1}
        assert Err('e').to_object() == {'ok': False, 'value': 'e'}

    def test_to_object_match(self):
        """The dict form works with structural pattern matching."""
        match Err('boom').to_object():
            case {'ok': False, 'value': error}:
                assert error == 'boom'
            case _:
                pytest.fail('expected Err')

    def test_from_object(self):
        """from_object() rebuilds a result."""
        assert Result.from_object({'ok': True, 'value': 1}).unwrap() == 1
        assert Result.from_object({'ok': False, 'value': 'e'}).unwrap_err() == 'e'


class TestResultLaws:
    """Property-based tests for the functor and monad laws."""

    @given(result_builders)
    def test_functor_identity(self, build):
        """map(identity) changes nothing."""
        assert build().map(identity) == build()

    @given(result_builders, int_functions, int_functions)
    def test_functor_composition(self, build, f, g):
        """map(f).map(g) equals map(g after f)."""
        assert build().map(f).map(g) == build().map(lambda x: g(f(x)))

    @given(integers, int_functions)
    def test_monad_left_identity(self, value, f):
        """Ok(a).and_then(k) equals k(a)."""

        def k(x):
            return Ok(f(x))

        assert Ok(value).and_then(k) == k(value)

    @given(result_builders)
    def test_monad_right_identity(self, build):
        """and_then(Ok) changes nothing."""
        assert build().and_then(Ok) == build()

    @given(result_builders, int_functions)
    def test_monad_associativity(self, build, f):
        """Nesting and_then does not matter."""

        def k(x):
            return Ok(f(x))

        def h(x):
            return Ok(x) if x >= 0 else Err('negative')

        assert build().and_then(k).and_then(h) == build().and_then(lambda x: k(x).and_then(h))

    @given(texts)
    def test_err_short_circuits(self, error):
        """map never runs on Err."""
        assert Err(error).map(lambda _: pytest.fail('called')).unwrap_err() == error

    @given(exceptions)
    def test_unwrap_err_payload(self, error):
        """UnwrapError carries the original error."""
        with pytest.raises(UnwrapError) as exc_info:
            Err(error).unwrap()
        assert exc_info.value.payload is error
