"""Domain layer for tasksync.

Pure models and functions with no I/O:

- shared: Result type and the error taxonomy
- task: task models, validation, partitions/statistics, domain events
- user: user and authentication state models
"""
