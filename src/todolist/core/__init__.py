"""
Shared store machinery.

Components:
- ports.py: Protocols the stores and the front end depend on
- notifier.py: ChangeNotifier (await-all, per-subscriber failure isolation)
- snapshot.py: SnapshotStore base (load / whole-snapshot save / notify)
- results.py: MutationResult and FailureReason
- state.py: AppState shared by the front end
"""
