import unittest
from unittest.mock import patch
import os
from .controller import main

class TestController(unittest.TestCase):
    def test_main_scopes_operator_to_configured_namespace(self):
        with patch('kopf.run') as mock_run, \
             patch.dict(os.environ, {'NAMESPACE': 'ingress'}):
            main()
            mock_run.assert_called_once_with(standalone=True, namespaces=['ingress'])

    def test_main_uses_default_namespace(self):
        with patch('kopf.run') as mock_run, \
             patch.dict(os.environ, {}, clear=True):
            main()
            mock_run.assert_called_once_with(standalone=True, namespaces=['default'])

if __name__ == '__main__':
    unittest.main()
