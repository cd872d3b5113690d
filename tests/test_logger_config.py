"""
Tests for logger configuration and correlation ids.
"""
import logging

from logger_config import (
    get_correlation_id,
    get_logger,
    reset_correlation_id,
    set_correlation_id,
    set_log_level,
)
from utils.decorators import block_handler


class TestGetLogger:
    """Tests for get_logger."""

    def test_logger_cached(self):
        logger = get_logger('tests.logging.cached')
        assert get_logger('tests.logging.cached') is logger
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_records_carry_correlation_id(self, capsys):
        logger = get_logger('tests.logging.correlation')
        token = set_correlation_id('run-123')
        try:
            logger.info('inside run')
        finally:
            reset_correlation_id(token)
        logger.info('outside run')

        out = capsys.readouterr().out
        assert '[run-123] inside run' in out
        assert '[-] outside run' in out

    def test_set_log_level(self, capsys):
        logger = get_logger('tests.logging.level')
        try:
            set_log_level('debug')
            assert logger.level == logging.DEBUG
            logger.debug('verbose')
            assert 'verbose' in capsys.readouterr().out
        finally:
            set_log_level('INFO')

        logger.debug('quiet')
        assert 'quiet' not in capsys.readouterr().out


class TestHandlerCorrelation:
    """The handler decorator binds one correlation id per invocation."""

    def test_correlation_id_bound_during_call(self, mock_context):
        seen = []

        @block_handler
        def records(event, context):
            seen.append(get_correlation_id())
            return {'ok': True}

        records({}, mock_context)
        records({}, mock_context)

        assert len(set(seen)) == 2
        assert '-' not in seen
        assert get_correlation_id() == '-'
