"""tasksync - task tracking client with a reactive synchronization engine."""

__version__ = "0.3.0"
