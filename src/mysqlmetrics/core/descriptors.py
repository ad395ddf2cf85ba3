"""Helpers for building metric descriptors."""

from mysqlmetrics.core.models import MetricDescriptor

NAMESPACE = "mysql"
EXPORTER_SUBSYSTEM = "exporter"


def new_desc(
    subsystem: str,
    name: str,
    help: str,
    label_names: tuple[str, ...] = (),
) -> MetricDescriptor:
    """Create a descriptor in the mysql namespace.

    Args:
        subsystem: Name component after the namespace (e.g. "slave_status").
        name: Trailing name component.
        help: Help text shown in the exposition output.
        label_names: Label names samples of this family carry.

    Returns:
        Immutable MetricDescriptor.
    """
    return MetricDescriptor(
        namespace=NAMESPACE,
        subsystem=subsystem,
        name=name,
        help=help,
        label_names=tuple(label_names),
    )


COLLECTOR_DURATION = new_desc(
    EXPORTER_SUBSYSTEM,
    "collector_duration_seconds",
    "Collector time duration.",
    ("collector",),
)
COLLECTOR_SUCCESS = new_desc(
    EXPORTER_SUBSYSTEM,
    "collector_success",
    "Whether a collector succeeded.",
    ("collector",),
)
LAST_SCRAPE_ERROR = new_desc(
    EXPORTER_SUBSYSTEM,
    "last_scrape_error",
    "Whether the last scrape of metrics from MySQL resulted in an error (1 for error, 0 for success).",
)
