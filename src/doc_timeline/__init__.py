"""Document Timeline.

Scans a folder of Markdown notes, selects the ones carrying a tag,
resolves a date for each and lays them out along a vertical timeline
with year markers and collision avoidance.
"""

__version__ = "0.1.0"
