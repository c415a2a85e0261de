import docker
import logging
from docker.errors import DockerException, NotFound, APIError
import polydoc.config as cfg

logger = logging.getLogger(__name__)

def _get_client():
    logger.info("Establishing connection to Docker...")
    try:
        client = docker.from_env()
        client.ping()
    except DockerException as e:
        logger.error("Docker is not running or not accessible.")
        raise RuntimeError("Docker is not running or not accessible.") from e
    return client

def _run_polypheny(client, container_name):
    image_name = cfg.get(cfg.POLYPHENY_IMAGE_NAME)
    logger.info(f"Pulling {image_name} for container '{container_name}'. This may take a moment...")
    try:
        client.images.pull(image_name)
        client.containers.run(
            image_name,
            name=container_name,
            ports=cfg.get(cfg.POLYPHENY_PORTS),
            detach=True
        )
    except DockerException as e:
        logger.error(f"Failed to create or run the Polypheny container: {e}")
        raise RuntimeError("Failed to create or run the Polypheny container.") from e
    logger.info(f"New Polypheny container '{container_name}' deployed and started.")

def _deploy_polypheny():
    """Start the configured Polypheny container, creating it from the image when absent."""
    client = _get_client()
    container_name = cfg.get(cfg.POLYPHENY_CONTAINER_NAME)
    try:
        client.containers.get(container_name).start()
    except NotFound:
        _run_polypheny(client, container_name)
        return
    logger.info(f"Container '{container_name}' found and started.")

def _retire_container(container_name: str, remove: bool):
    action = 'remove' if remove else 'stop'
    client = _get_client()
    try:
        container = client.containers.get(container_name)
        if container.status == 'running':
            container.stop()
        if remove:
            container.remove()
    except NotFound:
        logger.warning(f"No container named '{container_name}' found.")
        return
    except APIError as e:
        logger.error(f"Failed to {action} the container '{container_name}'")
        raise RuntimeError(f"Failed to {action} the container '{container_name}'") from e
    logger.info(f"Container '{container_name}' {'removed' if remove else 'stopped'}.")

def _stop_container_by_name(container_name: str):
    _retire_container(container_name, remove=False)

def _remove_container_by_name(container_name: str):
    _retire_container(container_name, remove=True)
