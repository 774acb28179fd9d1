"""beaut: single-owner Option and Result types, and cancellable futures.

Every container is used exactly once: reading or transforming it moves the
value into a new owner and leaves the old handle unusable.

Flat imports (preferred):
    from beaut import Option, Some, Nothing, Result, Ok, Err
    from beaut import Future, Task, spawn, ready, delay

Submodule imports (for organization):
    from beaut.option import Option, Some, Nothing
    from beaut.result import Result, Ok, Err
    from beaut.future import Future, map, then, and_then
    from beaut.decorators import safe, try_catch
"""

# Configuration
from beaut._config import BeautConfig, get_config, init, reset

# Logging
from beaut._logging import add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook

# Composition
from beaut.compose import Chain, chain, pipe

# Core helpers
from beaut.core import Mut, Ref, clone, empty, identity

# Decorators
from beaut.decorators import safe, safe_async, try_catch

# Errors
from beaut.errors import (
    OwnershipViolation,
    OwnershipViolationError,
    Rejected,
    RejectedError,
    UnwrapError,
    UnwrapFailure,
)

# Futures
from beaut.future import (
    Future,
    Reject,
    Resolve,
    Task,
    TaskOutcome,
    TaskStatus,
    delay,
    failed,
    from_coroutine,
    ready,
    ready_with,
    spawn,
)
from beaut.option import Nothing, Option, OptionObject, Some
from beaut.result import Err, Ok, Result, ResultObject

__all__ = [
    # Configuration
    'BeautConfig',
    # Composition
    'Chain',
    # Result types
    'Err',
    # Futures
    'Future',
    # Core helpers
    'Mut',
    # Option types
    'Nothing',
    'Ok',
    'Option',
    'OptionObject',
    # Errors
    'OwnershipViolation',
    'OwnershipViolationError',
    'Ref',
    'Reject',
    'Rejected',
    'RejectedError',
    'Resolve',
    'Result',
    'ResultObject',
    'Some',
    'Task',
    'TaskOutcome',
    'TaskStatus',
    'UnwrapError',
    'UnwrapFailure',
    # Logging
    'add_log_hook',
    'chain',
    'clear_log_hooks',
    'clone',
    'configure_logging',
    'delay',
    'empty',
    'failed',
    'from_coroutine',
    'get_config',
    'get_logger',
    'identity',
    'init',
    'pipe',
    'ready',
    'ready_with',
    'remove_log_hook',
    'reset',
    'safe',
    'safe_async',
    'spawn',
    'try_catch',
]
