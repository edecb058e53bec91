"""Input loading."""

from .loader import LoadedInputs, load_inputs, load_inputs_sync, read_json_array

__all__ = ["LoadedInputs", "load_inputs", "load_inputs_sync", "read_json_array"]
