"""Target configuration collector."""

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.utils.config import ProvenanceConfig


class CfgCollector:
    """Collects the target configuration (`CARGO_CFG_TARGET_*`)."""

    REQUIRED = (
        ("cfg_target_arch", "CARGO_CFG_TARGET_ARCH"),
        ("cfg_endian", "CARGO_CFG_TARGET_ENDIAN"),
        ("cfg_env", "CARGO_CFG_TARGET_ENV"),
        ("cfg_os", "CARGO_CFG_TARGET_OS"),
        ("cfg_pointer_width", "CARGO_CFG_TARGET_POINTER_WIDTH"),
    )

    @property
    def name(self) -> str:
        return "cfg"

    @property
    def description(self) -> str:
        return "Target architecture, endianness, environment, family, OS and pointer width"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.cfg

    def collect(self, context: CollectContext) -> CollectorResult:
        env = context.env
        data = {field: env.require(key) for field, key in self.REQUIRED}
        # Not set for every target
        data["cfg_family"] = env.get("CARGO_CFG_TARGET_FAMILY") or ""
        return CollectorResult.ok(self.name, data)
