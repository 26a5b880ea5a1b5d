"""Build time collector."""

from __future__ import annotations

from datetime import datetime, timezone

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.collectors.package import SOURCE_DATE_EPOCH
from build_provenance.core.environment import UNSET
from build_provenance.utils.config import ProvenanceConfig
from build_provenance.utils.errors import ConfigurationError
from build_provenance.utils.versions import format_build_time


class TimeCollector:
    """Records the build time as RFC 2822 in UTC.

    `SOURCE_DATE_EPOCH` (https://reproducible-builds.org/specs/source-date-epoch/)
    takes precedence over the clock.
    """

    @property
    def name(self) -> str:
        return "time"

    @property
    def description(self) -> str:
        return "Build time"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.time

    def collect(self, context: CollectContext) -> CollectorResult:
        built = context.env.get_override("BUILT_TIME_UTC", str)
        if built is UNSET:
            built = format_build_time(self._build_moment(context))
        return CollectorResult.ok(self.name, {"built_time_utc": built})

    def _build_moment(self, context: CollectContext) -> datetime:
        epoch = context.env.get(SOURCE_DATE_EPOCH)
        if epoch is None:
            return context.clock()
        try:
            return datetime.fromtimestamp(int(epoch), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            raise ConfigurationError(
                f"{SOURCE_DATE_EPOCH} is not a valid UNIX timestamp: {epoch!r}",
                config_key=SOURCE_DATE_EPOCH,
            ) from None
