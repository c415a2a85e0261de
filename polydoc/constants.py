# Constants
DEFAULT_NAMESPACE = 'public'
DEFAULT_CONTEXT = 'main'
DEFAULT_BACKEND = 'polypheny'
POLYPHENY_CONTAINER_NAME = 'polypheny'
POLYPHENY_IMAGE_NAME = 'vogti/polypheny'
POLYPHENY_PORTS = {
    "20590/tcp": 20590,
    "7659/tcp": 7659,
    "80/tcp": 80,
    "8081/tcp": 8081,
    "8082/tcp": 8082,
}
DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 20590
DEFAULT_TRANSPORT = 'plain'
DEFAULT_USER = 'pa'
DEFAULT_PASS = ''

# Document layout
KEY_FIELD = '_id'
ID_SUFFIX = '_id'
IDS_SUFFIX = '_ids'
ADD_SUFFIX = '_add'

# Derived Variables
DEFAULT_ADDRESS = (DEFAULT_HOST, DEFAULT_PORT)
