"""
Handler functions the workflow host calls to run and inspect blocks.

Events name a block by its "<app>/<block_id>" key, e.g.
"cloudformation/describe_stack_set_operation".
"""
from typing import Any, Dict

from blocks.registry import blocks_by_app, get_block
from config import Config, get_config
from logger_config import get_logger, set_log_level
from services.operation_invoker import OperationInvoker
from utils.decorators import block_handler
from utils.exceptions import ValidationError

logger = get_logger(__name__)


def _block_key(event: Dict[str, Any]) -> str:
    key = event.get('block')
    if not key:
        raise ValidationError('Event is missing the "block" key', field='block')
    return key


def _app_config(event: Dict[str, Any]) -> Config:
    """
    App config from the event when the host supplies one, else from env.

    The config's validated log level is applied to all block loggers.
    """
    app_config = event.get('app')
    config = Config.from_app_config(app_config) if app_config else get_config()
    set_log_level(config.log_level)
    return config


@block_handler
def run_block(event, context):
    """Run one block and return its emitted result."""
    block = get_block(_block_key(event))
    invoker = OperationInvoker(_app_config(event))

    emitted = []
    invoker.invoke(block, event.get('inputConfig') or {}, emit=emitted.append)

    logger.debug(f'Block {block.key} emitted {len(emitted)} event(s)')
    return emitted[0]


@block_handler
def describe_block(event, context):
    """Return a block's definition: name, description, config and output."""
    return get_block(_block_key(event)).describe()


@block_handler
def list_catalog(event, context):
    """List block ids grouped by app."""
    return {'apps': blocks_by_app()}
