"""
Utils package.

Shared helpers for the recurring charge detector:
- Calendar month arithmetic used by the analysis window and monthly breakdowns.
- The CSV ledger reader used by the command line script.
- API Gateway response helpers and the handler error-mapping decorator.
- Run timing and structured logging of detection metrics.

All money values are `Decimal`; JSON output encodes them as strings so no
precision is lost between the detector and the caller.
"""
