import kopf
import kubernetes
import logging
import threading
from typing import Any, Dict
from .aws.client import get_elbv2_client, get_tagging_client
from .config import ConfigError, ControllerConfig
from .kube.cache import ServiceCache
from .kube.client import get_core_v1_api, load_kube_config
from .reconciler import Reconciler
from .status.server import start_status_server

logger = logging.getLogger(__name__)

# Threads and shared objects started by the startup handler
STATE: Dict[str, Any] = {}

@kopf.on.startup()
def startup_fn(logger, **kwargs):
    """Load configuration and credentials, then start the service cache, the reconciliation loop and the status server."""
    try:
        config = ControllerConfig.from_env()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {str(e)}")
        raise kopf.PermanentError(f"Invalid configuration: {str(e)}")

    logger.info(f"Scanning for services in namespace {config.namespace}")

    try:
        load_kube_config()
    except kubernetes.config.ConfigException as e:
        logger.error(f"No usable Kubernetes credentials: {str(e)}")
        raise kopf.PermanentError(f"No usable Kubernetes credentials: {str(e)}")

    core_v1 = get_core_v1_api()
    elbv2 = get_elbv2_client(region=config.aws_region, max_attempts=config.aws_max_attempts)
    tagging = get_tagging_client(region=config.aws_region, max_attempts=config.aws_max_attempts)

    cache = ServiceCache(core_v1, config.namespace, watch_timeout=config.watch_timeout)
    reconciler = Reconciler(
        cache,
        core_v1,
        elbv2,
        tagging,
        interval=config.reconcile_interval,
        workers=config.reconcile_workers
    )
    stop_event = threading.Event()

    cache.start()

    loop_thread = threading.Thread(
        target=reconciler.run_forever,
        args=(stop_event,),
        name="reconciler",
        daemon=True
    )
    loop_thread.start()
    logger.info("Started reconciliation thread")

    if config.status_port:
        status_thread = threading.Thread(
            target=start_status_server,
            args=(reconciler, config.status_port),
            name="status-server",
            daemon=True
        )
        status_thread.start()
        logger.info("Started status server in background thread")

    STATE.update(
        config=config,
        cache=cache,
        reconciler=reconciler,
        stop_event=stop_event,
        loop_thread=loop_thread
    )

@kopf.on.cleanup()
def cleanup_fn(logger, **kwargs):
    """Stop the loop after the in-flight pass finishes, then stop the service watch."""
    stop_event = STATE.get('stop_event')
    if stop_event is None:
        return

    logger.info("Shutting down, waiting for the current reconciliation pass to finish")
    stop_event.set()
    loop_thread = STATE.get('loop_thread')
    if loop_thread is not None:
        loop_thread.join()

    cache = STATE.get('cache')
    if cache is not None:
        cache.stop(timeout=5)
    STATE.clear()
    logger.info("Shutdown complete")
