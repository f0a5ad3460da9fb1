"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying and analysis.
"""

# Identity events
CONF_INIT_STARTED = "conf_init_started"
CONF_INITIALIZED = "conf_initialized"
CONF_INIT_FAILED = "conf_init_failed"
MANIFEST_LOADED = "manifest_loaded"
HOSTNAME_LOOKUP_FAILED = "hostname_lookup_failed"

# Source events
CONF_SOURCE_ADDED = "conf_source_added"
CONF_SOURCE_SKIPPED = "conf_source_skipped"
CONF_SOURCES_LOADED = "conf_sources_loaded"
CONF_RELOADED = "conf_reloaded"
CONF_PARSE_FAILED = "conf_parse_failed"
CONF_LOAD_FAILED = "conf_load_failed"

# Monitoring events
MONITORING_ENABLED = "monitoring_enabled"
MONITORING_DISABLED = "monitoring_disabled"
GC_PROFILER_ENABLED = "gc_profiler_enabled"
