# utils/constants.py
API_VERSION = "backstage.io/v1alpha1"

ANNOTATION_LOCATION = "backstage.io/managed-by-location"
ANNOTATION_ORIGIN_LOCATION = "backstage.io/managed-by-origin-location"

# the shared SaaS deployment; everything else is self-managed
SAAS_HOST = "gitlab.com"

PER_PAGE = 100
REQUEST_TIMEOUT = 30
