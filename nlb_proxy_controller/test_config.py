import unittest
from .config import ConfigError, ControllerConfig

class TestControllerConfig(unittest.TestCase):
    def test_defaults(self):
        config = ControllerConfig.from_env({})
        self.assertEqual(config.namespace, "default")
        self.assertEqual(config.reconcile_interval, 10)
        self.assertEqual(config.reconcile_workers, 1)
        self.assertEqual(config.watch_timeout, 300)
        self.assertIsNone(config.aws_region)
        self.assertEqual(config.aws_max_attempts, 3)
        self.assertEqual(config.status_port, 8080)

    def test_values_from_environment(self):
        config = ControllerConfig.from_env({
            'NAMESPACE': 'ingress',
            'RECONCILE_INTERVAL': '30',
            'RECONCILE_WORKERS': '4',
            'AWS_DEFAULT_REGION': 'eu-west-1',
            'STATUS_PORT': '0',
        })
        self.assertEqual(config.namespace, "ingress")
        self.assertEqual(config.reconcile_interval, 30)
        self.assertEqual(config.reconcile_workers, 4)
        self.assertEqual(config.aws_region, "eu-west-1")
        self.assertEqual(config.status_port, 0)

    def test_aws_region_takes_precedence(self):
        config = ControllerConfig.from_env({'AWS_REGION': 'us-west-2', 'AWS_DEFAULT_REGION': 'eu-west-1'})
        self.assertEqual(config.aws_region, "us-west-2")

    def test_empty_namespace_falls_back_to_default(self):
        self.assertEqual(ControllerConfig.from_env({'NAMESPACE': ''}).namespace, "default")

    def test_invalid_interval(self):
        with self.assertRaises(ConfigError) as context:
            ControllerConfig.from_env({'RECONCILE_INTERVAL': 'soon'})
        self.assertIn('RECONCILE_INTERVAL must be an integer', str(context.exception))

    def test_interval_below_minimum(self):
        with self.assertRaises(ConfigError):
            ControllerConfig.from_env({'RECONCILE_INTERVAL': '0'})

if __name__ == '__main__':
    unittest.main()
