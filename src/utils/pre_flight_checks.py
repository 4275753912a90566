from src.utils.config import MigrationConfig


class PreFlightCheckError(Exception):
    """Custom exception for pre-flight check failures."""
    pass


def run_shopify_pre_flight_checks(config: MigrationConfig) -> None:
    """
    Verifies that the source store is configured before any network call.

    Destination settings are checked later, where they are used, so a
    missing destination token surfaces as a per-asset upload failure.

    Args:
        config: The run configuration.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    if not config.source_store_url:
        raise PreFlightCheckError("Source store URL is not defined")
    if not config.source_store_token:
        raise PreFlightCheckError("Source store token is not defined")

    print("[INFO] Pre-flight checks passed successfully.")
