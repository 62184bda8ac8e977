"""Tests for failure classification."""
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from logmigration.errors import StorageError, is_null_byte_violation, strip_null_bytes


def test_postgresql_encoding_error_is_null_byte_violation():
    error = DataError("INSERT", {}, Exception('invalid byte sequence for encoding "UTF8": 0x00'))
    assert is_null_byte_violation(error)


def test_integrity_error_with_nul_message():
    error = IntegrityError("INSERT", {}, Exception('invalid byte sequence for encoding "UTF8": 0x00'))
    assert is_null_byte_violation(error)


def test_driver_value_error():
    assert is_null_byte_violation(ValueError('A string literal cannot contain NUL (0x00) characters.'))


def test_other_integrity_errors():
    error = IntegrityError("INSERT", {}, Exception('duplicate key value violates unique constraint "log_pk"'))
    assert not is_null_byte_violation(error)


def test_other_error_classes():
    assert not is_null_byte_violation(OperationalError("INSERT", {}, Exception('0x00')))
    assert not is_null_byte_violation(StorageError('0x00'))
    assert not is_null_byte_violation(ValueError('invalid literal for int()'))


def test_strip_null_bytes():
    assert strip_null_bytes('a\x00b\x00') == 'ab'
    assert strip_null_bytes('clean') == 'clean'
    assert strip_null_bytes(None) is None
