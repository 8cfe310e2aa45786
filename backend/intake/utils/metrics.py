# /intake/utils/metrics.py

from prometheus_client import Counter, Histogram

# This file defines all Prometheus metrics used for application monitoring.
# Centralizing them here makes them easy to find and manage.

# Workflow Metrics
workflow_events_counter = Counter('workflow_events_total', 'Workflow events processed', ['state', 'event', 'applied'])
flow_actors_counter = Counter('flow_actors_total', 'Flow actors created or loaded', ['operation'])
guard_redirects_counter = Counter('flow_guard_redirects_total', 'Requests redirected by the flow guard', ['reason'])

# Session Store Metrics
flow_store_operations = Counter('flow_store_operations_total', 'Flow registry operations', ['operation', 'status'])

# Performance Metrics
response_time_histogram = Histogram('response_time_seconds', 'Response time in seconds', ['endpoint'])
