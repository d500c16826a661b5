"""Example: run the analyzer through the service layer (no Flask).

Records are passed exactly as the leave-management subsystem returns them.
"""

import json
from datetime import date

from config import load_settings

from src.leave_patterns.leave_patterns.analysis.model import AnalysisWindow
from src.leave_patterns.leave_patterns.container import build_container

RECORDS = [
    {"_id": "L1", "employeeId": "E42", "leaveTypeId": "annual", "dates": {"from": "2026-01-09", "to": "2026-01-09"},
     "status": "approved", "createdAt": "2026-01-09T07:55:00Z"},
    {"_id": "L2", "employeeId": "E42", "leaveTypeId": "annual", "dates": {"from": "2026-01-23", "to": "2026-01-23"},
     "status": "approved", "createdAt": "2026-01-23T08:10:00Z"},
    {"_id": "L3", "employeeId": "E42", "leaveTypeId": "annual", "dates": {"from": "2026-02-06", "to": "2026-02-06"},
     "status": "approved", "createdAt": "2026-02-05T17:00:00Z"},
    {"_id": "L4", "employeeId": "E42", "leaveTypeId": "sick", "dates": {"from": "2026-02-18", "to": "2026-02-18"},
     "status": "approved", "createdAt": "2026-02-18T06:30:00Z"},
    {"_id": "L5", "employeeId": "E42", "leaveTypeId": "annual", "dates": {"from": "2026-03-02", "to": "2026-03-02"},
     "status": "pending", "createdAt": "2026-03-02T07:00:00Z"},
    {"_id": "L6", "employeeId": "E42", "leaveTypeId": "annual", "dates": {"from": "2026-03-20", "to": "2026-03-20"},
     "status": "approved", "createdAt": "2026-03-01T09:00:00Z"},
]


def main():
    settings = load_settings()
    container = build_container(analyzer_config=settings.LEAVE_PATTERN_CONFIG)
    window = AnalysisWindow(start=date(2026, 1, 1), end=date(2026, 3, 31))
    result = container.leave_pattern_service.analyze("E42", RECORDS, window)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
