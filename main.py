"""
Entry point for the Shopify theme asset migration tool.
"""

from dotenv import load_dotenv

from src.migration_tool import ThemeMigrationTool
from src.utils.config import load_config

CONFIG_FILE = "config/migration_config.json"


def main():
    """
    Main function to run the theme asset migration.
    """
    load_dotenv()
    try:
        config = load_config(CONFIG_FILE)
    except ValueError as e:
        print(f"[ERROR] failed migrating: {e}")
        return

    tool = ThemeMigrationTool(config)
    tool.log_message("Starting Shopify theme asset migration.")
    if config.dry_run:
        tool.log_message("Dry-run enabled: no asset will be downloaded or uploaded.", level="DEBUG")

    summary = tool.migrate_assets()
    if summary.aborted:
        return

    tool.log_message("Migration process finished.")


if __name__ == "__main__":
    main()
