"""
Tests for Configuration, Logging and Errors
===========================================
"""

import json
import logging

import pytest

from grammar_lint.base import TextKind
from grammar_lint.config import CheckConfiguration, apply_env, load_configuration
from grammar_lint.config_logging import (
    ConfigurationError, DictionaryError, GrammarLintError, GrammarServiceError,
    JsonFormatter, get_logger,
)

from .fakes import recorded_logs


class TestCheckConfiguration:
    """Tests for CheckConfiguration."""

    def test_defaults(self):
        """An empty options dict is valid."""
        config = CheckConfiguration.from_options({})
        assert config == CheckConfiguration()
        assert config.language == 'en_US'
        assert config.min_length == 1
        assert config.sentences is False
        assert config.spelling is True

    def test_options_mapped(self):
        """camelCase host options map onto settings."""
        config = CheckConfiguration.from_options({
            'lang': 'en_GB',
            'minLength': 3,
            'skipWords': ['Acme', 'FooBar'],
            'skipIfMatch': [r'^https?://'],
            'checkContractions': False,
            'sentences': True,
            'confidence': 0.5,
        })
        assert config.language == 'en_GB'
        assert config.min_length == 3
        assert config.skip_words == frozenset({'acme', 'foobar'})
        assert config.skip_if_match[0].search('http://example.com')
        assert config.contractions is False
        assert config.confidence == 0.5

    def test_hashable(self):
        """Equal configurations hash equal."""
        first = CheckConfiguration.from_options({'skipWords': ['A', 'b']})
        second = CheckConfiguration.from_options({'skipWords': ['B', 'a']})
        assert first == second
        assert hash(first) == hash(second)

    @pytest.mark.parametrize("options", [
        {'bogus': True},
        {'minLength': 'three'},
        {'minLength': -1},
        {'sentences': 'yes'},
        {'skipWords': 'word'},
        {'skipIfMatch': ['(unclosed']},
        {'confidence': 2},
        {'lang': ''},
        {'grammarTimeout': 0},
    ])
    def test_invalid_options(self, options):
        """Invalid options raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            CheckConfiguration.from_options(options)

    def test_kind_toggles(self):
        """Each text kind has its own toggle."""
        config = CheckConfiguration(identifiers=False)
        assert config.is_kind_enabled(TextKind.COMMENT)
        assert not config.is_kind_enabled(TextKind.IDENTIFIER)

    def test_to_dict(self):
        """Settings serialise with host option names."""
        data = CheckConfiguration(skip_if_match=(r'^x',)).to_dict()
        assert data['lang'] == 'en_US'
        assert data['skipIfMatch'] == ['^x']


class TestEnvironment:
    """Tests for environment overrides."""

    def test_overrides(self):
        """Environment variables override options."""
        config = load_configuration({'lang': 'en_US'}, {
            'GRAMMAR_LINT_LANG': 'en_GB',
            'GRAMMAR_LINT_SENTENCES': 'true',
            'GRAMMAR_LINT_CONFIDENCE': '0.7',
        })
        assert config.language == 'en_GB'
        assert config.sentences is True
        assert config.confidence == 0.7

    def test_invalid_value_ignored(self):
        """Unparseable values are logged and ignored."""
        config = apply_env(CheckConfiguration(), {'GRAMMAR_LINT_CONFIDENCE': 'high'})
        assert config.confidence == 0.0

    def test_empty_environment(self):
        """No overrides returns the same configuration."""
        config = CheckConfiguration()
        assert apply_env(config, {}) is config


class TestLogging:
    """Tests for the structured logger."""

    def test_package_prefix(self):
        """Loggers live under the package namespace."""
        assert get_logger('tests').name == 'grammar_lint.tests'
        assert get_logger('grammar_lint.config') is get_logger('grammar_lint.config')

    def test_json_formatter(self):
        """Context fields are added to JSON records."""
        record = logging.LogRecord('grammar_lint.test', logging.INFO, __file__, 1,
                                   'Checked', None, None)
        record.context = {'issues': 3, 'span': (4, 9)}
        data = json.loads(JsonFormatter().format(record))
        assert data['message'] == 'Checked'
        assert data['level'] == 'INFO'
        assert data['issues'] == 3
        assert data['span'] == '(4, 9)'

    def test_log_operation(self):
        """Operations log start and completion with their context."""
        logger = get_logger('tests.operations')
        with recorded_logs('tests.operations') as records:
            with logger.log_operation("Index build", size=3):
                pass
        assert [r.context['status'] for r in records] == ['started', 'completed']
        assert records[1].context['size'] == 3
        assert 'duration_ms' in records[1].context

    def test_log_operation_failure(self):
        """A failing operation is logged as failed and re-raised."""
        logger = get_logger('tests.operations')
        with recorded_logs('tests.operations') as records:
            with pytest.raises(ValueError):
                with logger.log_operation("Index build"):
                    raise ValueError("bad index")
        assert records[-1].context['status'] == 'failed'
        assert 'bad index' in records[-1].getMessage()


class TestErrors:
    """Tests for the exception taxonomy."""

    def test_hierarchy(self):
        """Every error is a GrammarLintError."""
        for error in (ConfigurationError("x"), DictionaryError("x"), GrammarServiceError("x")):
            assert isinstance(error, GrammarLintError)

    def test_to_dict(self):
        """Errors serialise with code and details."""
        data = DictionaryError("Dictionary not found", language='xx_XX').to_dict()
        assert data['success'] is False
        assert data['error']['code'] == 'DICTIONARY_ERROR'
        assert data['error']['details']['language'] == 'xx_XX'
