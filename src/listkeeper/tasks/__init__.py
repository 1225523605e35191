"""
Task subsystem.

Components:
- task_models.py: data structures (Task, StatusFilter) and date parsing
- task_list.py: pure list operations, slot codec and the view projection
- task_store.py: slot-backed store that owns the list and persists mutations
"""
