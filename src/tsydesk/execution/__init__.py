"""Execution Module - algo execution and venue routing."""

from tsydesk.execution.algo import AlgoExecutionService
from tsydesk.execution.models import AlgoExecution, ExecutionOrder, generate_order_id
from tsydesk.execution.service import ExecutionService

__all__ = [
    "AlgoExecution",
    "AlgoExecutionService",
    "ExecutionOrder",
    "ExecutionService",
    "generate_order_id",
]
