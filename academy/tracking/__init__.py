"""Client-side unit visit tracking.

``UnitVisitTracker`` turns unit switches into analytics calls independently of
any UI framework; ``AnalyticsClient`` delivers those calls to the API.
"""

from academy.tracking.client import AnalyticsClient
from academy.tracking.visit import AnalyticsSink, TrackedUnit, UnitVisitTracker, VisitState


__all__ = ["AnalyticsClient", "AnalyticsSink", "TrackedUnit", "UnitVisitTracker", "VisitState"]
