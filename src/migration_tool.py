"""
High-level orchestration of the Shopify theme asset migration.

This module defines a :class:`ThemeMigrationTool` class that ties together
the theme resolver, the asset transfer unit and the reporting utilities
into a complete pipeline: resolve the source store's main theme, list its
assets, resolve the destination theme by name and copy every asset across,
one at a time.

Lookups that the rest of the run depends on (themes, asset list) abort the
run when they fail.  Per-asset failures are recorded and the run moves on
to the next asset.  Configuration is supplied as a
:class:`~src.utils.config.MigrationConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from models.shopify_theme import Asset, Theme
from src.migrators import shopify_client
from src.migrators.asset_transfer import DRY_RUN, FAILED, MIGRATED, SKIPPED, AssetOutcome, transfer_asset
from src.migrators.themes import fetch_assets, resolve_theme
from src.utils.config import MigrationConfig
from src.utils.errors import report_error, report_ok
from src.utils.pre_flight_checks import PreFlightCheckError, run_shopify_pre_flight_checks
from src.utils.reports import generate_transfer_report_csv


class MigrationAborted(Exception):
    """A step the whole run depends on has failed."""


@dataclass
class MigrationSummary:
    source_theme: Optional[Theme] = None
    destination_theme: Optional[Theme] = None
    outcomes: List[AssetOutcome] = field(default_factory=list)
    error: Optional[str] = None

    def _count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def migrated(self) -> int:
        return self._count(MIGRATED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def planned(self) -> int:
        return self._count(DRY_RUN)

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def orphaned_files(self) -> List[str]:
        return [o.staged_path for o in self.outcomes if o.staged_path]


class ThemeMigrationTool:
    """
    Encapsulates the state of one migration run.  The configuration is read
    once at construction and never changes; the summary of the last run is
    kept on :attr:`summary`.
    """

    def __init__(self, config: MigrationConfig, *, report_path: str = "reports/asset_transfer.csv") -> None:
        self.config = config
        self.report_path = report_path
        self.summary = MigrationSummary()
        shopify_client.set_rate_limit(config.requests_per_minute)

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        os.makedirs("reports/migration", exist_ok=True)
        with open("reports/migration/migration.log", "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def _resolve_source_theme(self) -> Theme:
        cfg = self.config
        result = resolve_theme(
            cfg.source_store_url,
            cfg.source_store_token,
            role=cfg.source_theme_role,
            timeout=cfg.request_timeout,
        )
        if not result.ok:
            raise MigrationAborted(f"Main theme not found in source store: {result.message}")
        return result.value

    def _list_source_assets(self, theme: Theme) -> List[Asset]:
        cfg = self.config
        result = fetch_assets(cfg.source_store_url, cfg.source_store_token, theme.id, timeout=cfg.request_timeout)
        if not result.ok:
            raise MigrationAborted(f"No assets found in source store: {result.message}")
        return result.value

    def _resolve_destination_theme(self) -> Theme:
        cfg = self.config
        result = resolve_theme(
            cfg.destination_store_url,
            cfg.destination_store_token,
            name=cfg.destination_store_theme,
            timeout=cfg.request_timeout,
        )
        if not result.ok:
            raise MigrationAborted(
                f"Theme '{cfg.destination_store_theme}' not found in destination store: {result.message}"
            )
        return result.value

    def migrate_assets(self) -> MigrationSummary:
        """
        Run the full migration and return its summary.

        Failures of the pre-flight checks, theme resolution or the asset
        listing end the run; they are logged with a ``failed migrating``
        prefix and stored in :attr:`MigrationSummary.error`.  Assets are
        processed strictly in the order returned by the source store.

        :return: The :class:`MigrationSummary` of this run.
        """
        self.summary = summary = MigrationSummary()
        try:
            run_shopify_pre_flight_checks(self.config)
            summary.source_theme = self._resolve_source_theme()
            self.log_message(f"Source theme: {summary.source_theme.name} ({summary.source_theme.id})")
            assets = self._list_source_assets(summary.source_theme)
            self.log_message(f"Found {len(assets)} assets in source theme.")
            summary.destination_theme = self._resolve_destination_theme()
            self.log_message(
                f"Destination theme: {summary.destination_theme.name} ({summary.destination_theme.id})"
            )
        except (PreFlightCheckError, MigrationAborted) as e:
            summary.error = str(e)
            self.log_message(f"failed migrating: {e}", "ERROR")
            return summary

        self._process_assets(assets, summary.destination_theme.id)

        if self.config.dry_run:
            self.log_message(
                f"Dry-run finished: {summary.planned} would be migrated, {summary.skipped} skipped."
            )
        else:
            self.log_message(
                f"Migration finished: {summary.migrated} migrated, {summary.failed} failed, "
                f"{summary.skipped} skipped."
            )
        for path in summary.orphaned_files:
            self.log_message(f"Staged file left behind after failed upload: {path}", "WARNING")
        try:
            generate_transfer_report_csv(summary.outcomes, out_path=self.report_path)
        except OSError as e:
            self.log_message(f"Failed to write transfer report: {e}", "ERROR")
        return summary

    def _process_assets(self, assets: List[Asset], theme_id: int) -> None:
        limit = self.config.limit
        processed = 0
        for asset in assets:
            if not asset.transferable:
                self.summary.outcomes.append(AssetOutcome(asset.key, SKIPPED, "ASSET_SKIPPED"))
                continue
            if limit is not None and processed >= limit:
                self.summary.outcomes.append(AssetOutcome(asset.key, SKIPPED, "ASSET_LIMITED"))
                continue
            processed += 1

            if self.config.dry_run:
                self.log_message(f"Dry-run: would migrate asset {asset.key}")
                self.summary.outcomes.append(AssetOutcome(asset.key, DRY_RUN, "ASSET_DRY_RUN"))
                continue

            self.log_message(f"Migrating asset: {asset.key}")
            outcome = transfer_asset(asset, self.config, theme_id)
            self.summary.outcomes.append(outcome)
            if outcome.status == MIGRATED:
                report_ok(outcome.code, asset.key, {"theme_id": theme_id})
            else:
                report_error(outcome.code, asset.key, outcome.message)
                self.log_message(outcome.message, "ERROR")
