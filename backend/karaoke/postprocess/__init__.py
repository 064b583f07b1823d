from .timeline import collect_timeline_adjustments, repair_timeline

__all__ = ["collect_timeline_adjustments", "repair_timeline"]
