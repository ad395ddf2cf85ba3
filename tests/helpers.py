"""Constants and helpers shared by test modules."""

from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink
from mysqlmetrics.core.models import ValueType

SERVER_UUID = "215d19f8-7eca-11ed-9d98-00163e000147"

SLAVE_COLUMNS = [
    "Slave_IO_State",
    "Master_Host",
    "Master_User",
    "Master_Port",
    "Master_Log_File",
    "Read_Master_Log_Pos",
    "Relay_Log_File",
    "Relay_Master_Log_File",
    "Slave_IO_Running",
    "Slave_SQL_Running",
    "Seconds_Behind_Master",
    "Master_UUID",
    "Executed_Gtid_Set",
    "Channel_Name",
]


def summarize(
    sink: InMemorySampleSink,
) -> list[tuple[str, dict[str, str], float, ValueType]]:
    """Return (name, labels, value, type) for every sample in sink."""
    return [(s.name, s.labels, s.value, s.value_type) for s in sink.samples]
