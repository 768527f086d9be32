"""Reading and writing line-oriented signal fixtures."""
from .fixtures import SignalWriter, format_value, load_fixture, parse_value, read_signal, write_signal
