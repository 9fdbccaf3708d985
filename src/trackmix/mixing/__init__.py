"""Mix planning for trackmix.

- plan_mix: Validate and consolidate raw selections into a MixPlan
- load_selection_file: Read selections from a YAML or JSON file
- parse_track_spec: Parse command-line track specs such as "1=jpn,2"
"""

from trackmix.mixing.planner import clean_track_ids, plan_mix
from trackmix.mixing.selection_file import (
    SelectionEntryModel,
    load_selection_data,
    load_selection_file,
    parse_track_spec,
)

__all__ = [
    "SelectionEntryModel",
    "clean_track_ids",
    "load_selection_data",
    "load_selection_file",
    "parse_track_spec",
    "plan_mix",
]
