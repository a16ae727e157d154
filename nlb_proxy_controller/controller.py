"""
Main controller module that initializes and runs the NLB PROXY protocol operator.

Run with ``kopf run -m nlb_proxy_controller.controller`` or the
``nlb-proxy-controller`` console script.
"""

import kopf

from . import handlers  # This will import and register all kopf handlers
from .config import ControllerConfig

def main():
    """Run the operator standalone, scoped to the configured namespace."""
    config = ControllerConfig.from_env()
    kopf.run(
        standalone=True,
        namespaces=[config.namespace]
    )

if __name__ == '__main__':
    main()
