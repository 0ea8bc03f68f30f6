"""
Format validator tests.

Covers the OTP, mobile number, PAN, email and identifier validators plus the
startup-time behaviour of pattern compilation.
"""

import re

import pytest

from request_validator.utils.exceptions import ConfigurationError
from request_validator.validation.formats import (
    EMAIL_ERROR,
    ID_ERROR,
    MOBILE_ERROR,
    OTP_ERROR,
    PAN_ERROR,
    ValidationResult,
    compile_pattern,
    validate_email_format,
    validate_identifier,
    validate_mobile_number,
    validate_otp,
    validate_pan,
)


class TestOTPValidator:

    @pytest.mark.parametrize('value', ['000000', '123456', '999999'])
    def test_six_digits_pass(self, value):
        result = validate_otp(value)
        assert result.is_valid
        assert result.errors == []

    @pytest.mark.parametrize('value', [
        '12345',
        '1234567',
        '',
        '12345a',
        ' 123456',
        '123456\n',
        '12 456',
        '١٢٣٤٥٦',  # Arabic-Indic digits are not ASCII digits
    ])
    def test_everything_else_fails(self, value):
        result = validate_otp(value)
        assert not result.is_valid
        assert result.errors == [OTP_ERROR]
        assert result.rule == 'otp'


class TestMobileValidator:

    def test_ten_digits_pass(self):
        assert validate_mobile_number('9876543210').is_valid

    @pytest.mark.parametrize('value', ['987654321', '98765432101', '+919876543210', '98765-43210', ''])
    def test_wrong_shape_fails(self, value):
        result = validate_mobile_number(value)
        assert result.errors == [MOBILE_ERROR]


class TestPANValidator:

    @pytest.mark.parametrize('value', ['ABCDE1234F', 'ZZZZZ0000Z'])
    def test_valid_pan(self, value):
        assert validate_pan(value).is_valid

    @pytest.mark.parametrize('value', [
        'abcde1234f',
        'ABCDE1234',
        'ABCDE12345F',
        'ABCD1234FG',
        'ABCDE1234f',
        '1BCDE1234F',
        'ABCDE 1234F',
    ])
    def test_invalid_pan(self, value):
        result = validate_pan(value)
        assert not result
        assert result.errors == [PAN_ERROR]


class TestEmailValidator:

    @pytest.mark.parametrize('value', [
        'user@example.com',
        'first.last+tag@sub.example.co',
        'a_b%c-d@mail-server.io',
        'UPPER@EXAMPLE.ORG',
    ])
    def test_valid_email(self, value):
        assert validate_email_format(value).is_valid

    @pytest.mark.parametrize('value', [
        'bad-email',
        'user@localhost',
        'user@example.c',
        '@example.com',
        'user@@example.com',
        'user@example.com ',
        'user name@example.com',
    ])
    def test_invalid_email(self, value):
        assert validate_email_format(value).errors == [EMAIL_ERROR]


class TestIdentifierValidator:

    @pytest.mark.parametrize('value', ['', 'abc123', 'ABC', '42', 'dGVzdA==', '12345'])
    def test_alphanumeric_and_padding_pass(self, value):
        assert validate_identifier(value).is_valid

    @pytest.mark.parametrize('value', ['abc-123', 'abc_123', 'a b', 'id!', '[1,2]'])
    def test_other_characters_fail(self, value):
        assert validate_identifier(value).errors == [ID_ERROR]


class TestValidationResult:

    def test_truthiness_follows_outcome(self):
        assert ValidationResult(True, 'x')
        assert not ValidationResult(False, 'x', ['boom'], 'otp')


class TestPatternCompilation:

    def test_compile_pattern_returns_pattern(self):
        pattern = compile_pattern('digits', r'[0-9]+')
        assert isinstance(pattern, re.Pattern)
        assert pattern.fullmatch('123')

    def test_invalid_pattern_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="'broken'"):
            compile_pattern('broken', r'[a-z')
