"""Engine registry, data model, dispatcher and research orchestration."""
