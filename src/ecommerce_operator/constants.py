"""Constants for the ECommerce Application Operator."""

# API Group
API_GROUP = "cache.saas.ecommerce.sample.com"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"
PLURAL_APPLICATION = "ecommerceapplications"

# Resource Kinds
KIND_APPLICATION = "ECommerceApplication"
KIND_SECRET = "Secret"
KIND_JOB = "Job"
KIND_DEPLOYMENT = "Deployment"

# Labels
LABEL_MANAGED_BY = f"{API_GROUP}/managed-by"
LABEL_APP = "app"
LABEL_APP_VALUE = "memcached"
LABEL_APPLICATION_NAME = "memcached_cr"

# Annotations
ANNOTATION_INIT_TOKEN = f"{API_GROUP}/init-token"

# Field Manager
FIELD_MANAGER = "ecommerce-operator"

# Credential source
CREDENTIAL_SOURCE_DATA_KEY = "connection"

# Normalized secrets (name, key)
SECRET_USERNAME = ("postgres.username", "POSTGRES_USERNAME")
SECRET_PASSWORD = ("postgres.password", "POSTGRES_PASSWORD")
SECRET_CERTIFICATE = ("postgres.certificate-data", "POSTGRES_CERTIFICATE_DATA")
SECRET_URL = ("postgres.url", "POSTGRES_URL")

POSTGRES_URL_TEMPLATE = (
    "jdbc:postgresql://{hostname}:{port}/{database}"
    "?sslmode=verify-full&sslrootcert=/cloud-postgres-cert"
)

# Init job
INIT_JOB_NAME = "pg"
INIT_JOB_CONTAINER = "pg"
INIT_JOB_COMMAND = ["/bin/sh", "-c", "date; echo Hello from the Kubernetes cluster"]

# Workload
WORKLOAD_CONTAINER = "service-catalog"

# Condition Types
COND_READY = "Ready"
COND_CREDENTIALS_PENDING = "CredentialsPending"
COND_RECONCILE_FAILED = "ReconcileFailed"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_CREDENTIALS_PENDING = "CredentialsPending"
EVENT_REASON_WORKLOAD_CREATED = "WorkloadCreated"
EVENT_REASON_REPLICAS_ADJUSTED = "ReplicasAdjusted"
