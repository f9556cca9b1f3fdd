"""
Recurring Charge Operations Handler.

This module provides the API endpoint that runs recurring charge detection
over a batch of ledger transactions and returns the ranked report.
"""

import logging
from datetime import date
from typing import Dict, Any, List

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)
from models.transaction import TransactionRecord
from services.recurring_charges import (
    DetectionConfig,
    RecurringChargeDetectionService,
)
from utils.lambda_utils import (
    handle_error,
    parse_json_body,
)
from utils.handler_decorators import standard_error_handling

NO_RECURRING_CHARGES_MESSAGE = "No recurring charges detected"


# ============================================================================
# Handler Functions
# ============================================================================

@standard_error_handling
def detect_recurring_charges_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Run recurring charge detection over the posted transactions.

    POST /recurring-charges/detect

    Request body:
    {
        "transactions": [                      # Required, ledger order
            {"date": "2024-01-15", "amount": "15.49", "merchantRaw": "NETFLIX.COM",
             "categoryPrimary": "Entertainment", "accountName": "Visa", "pending": false}
        ],
        "config": {"amountTolerance": 0.05},   # Optional, invalid values use defaults
        "runDate": "2024-06-30"                # Optional, defaults to today
    }

    Returns:
    {
        "count": 1,
        "totalAnnualized": "185.88",
        "candidates": [...],
        "config": {...},                       # Effective config, for the caller to persist
        "message": "No recurring charges detected"   # Only when count is 0
    }
    """
    body = parse_json_body(event)

    raw_transactions = body.get("transactions")
    if raw_transactions is None:
        raise KeyError("Body parameter transactions is required")
    if not isinstance(raw_transactions, list):
        raise ValueError("transactions must be a list")

    transactions: List[TransactionRecord] = [
        TransactionRecord.model_validate(item) for item in raw_transactions
    ]

    raw_config = body.get("config")
    config = DetectionConfig.from_mapping(raw_config if isinstance(raw_config, dict) else None)

    run_date = None
    if body.get("runDate"):
        try:
            run_date = date.fromisoformat(str(body["runDate"])[:10])
        except ValueError as e:
            raise ValueError(f"Invalid runDate: {body['runDate']}") from e

    logger.info(f"Detecting recurring charges in {len(transactions)} transactions")

    report = RecurringChargeDetectionService(config).detect_recurring_charges(
        transactions, run_date=run_date
    )

    response = report.to_dict()
    response["config"] = config.to_dict()
    if report.is_empty:
        response["message"] = NO_RECURRING_CHARGES_MESSAGE

    return response


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main handler for recurring charge operations.

    Routes requests to appropriate handler functions based on route.
    """
    route = event.get("routeKey")
    if not route:
        return handle_error(400, "Route not specified")

    route_map = {
        "POST /recurring-charges/detect": detect_recurring_charges_handler,
    }

    handler_func = route_map.get(route)
    if not handler_func:
        logger.warning(f"Unsupported route: {route}")
        return handle_error(404, f"Unsupported route: {route}")

    return handler_func(event, context)
