# Inventory module - polling-and-aggregation engine for store stock counts
# Contains: config, models, parser, base_driver, checker, scheduler, metrics, pipeline

from .config import load_config, MonitorConfig, ProductSpec, BrowserOptions
from .models import CheckOutcome, CheckError, CheckErrorKind
from .parser import extract_count, read_inventory_text, InventoryReading
from .base_driver import (
    PageDriver,
    PlaywrightDriver,
    DriverError,
    NavigationError,
    ElementNotFoundError,
    TextExtractionError,
    SessionError,
)
from .checker import InventoryChecker
from .scheduler import Scheduler, SchedulerState
from .metrics import InventoryMetrics, start_metrics_server
from .pipeline import ResultPipeline, CLOSED, new_outcome_queue

__all__ = [
    'load_config',
    'MonitorConfig',
    'ProductSpec',
    'BrowserOptions',
    'CheckOutcome',
    'CheckError',
    'CheckErrorKind',
    'extract_count',
    'read_inventory_text',
    'InventoryReading',
    'PageDriver',
    'PlaywrightDriver',
    'DriverError',
    'NavigationError',
    'ElementNotFoundError',
    'TextExtractionError',
    'SessionError',
    'InventoryChecker',
    'Scheduler',
    'SchedulerState',
    'InventoryMetrics',
    'start_metrics_server',
    'ResultPipeline',
    'CLOSED',
    'new_outcome_queue',
]
