"""Shared constants for sparkgang."""

# SparkApplication custom resource served by the Spark operator
SPARK_OPERATOR_API_VERSION = "sparkoperator.k8s.io/v1beta2"
SPARK_APPLICATION_KIND = "SparkApplication"

# Batch scheduler used when neither the manifest nor the CLI names one
DEFAULT_BATCH_SCHEDULER = "yunikorn"
