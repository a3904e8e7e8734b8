"""
Task subsystem.

Components:
- sequential_queue.py: single-lane FIFO queue for async work (SequentialTaskQueue)
"""

from .sequential_queue import QueueState, SequentialTaskQueue, TaskFactory, timeboxed

__all__ = ["QueueState", "SequentialTaskQueue", "TaskFactory", "timeboxed"]
