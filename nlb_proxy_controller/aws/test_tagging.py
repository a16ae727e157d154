import unittest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError
from .tagging import resolve_target_groups, service_tag_value

class TestResolveTargetGroups(unittest.TestCase):
    def setUp(self):
        self.mock_tagging = MagicMock()
        self.paginator = self.mock_tagging.get_paginator.return_value

    def test_service_tag_value(self):
        self.assertEqual(service_tag_value("default", "web"), "default/web")

    def test_filters_by_service_tag(self):
        self.paginator.paginate.return_value = [{
            'ResourceTagMappingList': [
                {'ResourceARN': 'arn:aws:elasticloadbalancing:us-east-1:123456789012:targetgroup/k8s-web/1'}
            ]
        }]

        arns = resolve_target_groups(self.mock_tagging, "default", "web")

        self.assertEqual(arns, ['arn:aws:elasticloadbalancing:us-east-1:123456789012:targetgroup/k8s-web/1'])
        self.mock_tagging.get_paginator.assert_called_once_with('get_resources')
        self.paginator.paginate.assert_called_once_with(
            ResourceTypeFilters=['elasticloadbalancing:targetgroup'],
            TagFilters=[{'Key': 'kubernetes.io/service-name', 'Values': ['default/web']}]
        )

    def test_collects_every_page(self):
        self.paginator.paginate.return_value = [
            {'ResourceTagMappingList': [{'ResourceARN': 'tg-1'}]},
            {'ResourceTagMappingList': [{'ResourceARN': 'tg-2'}, {'Tags': []}]},
        ]

        self.assertEqual(resolve_target_groups(self.mock_tagging, "default", "web"), ['tg-1', 'tg-2'])

    def test_no_target_groups(self):
        self.paginator.paginate.return_value = [{'ResourceTagMappingList': []}, {}]

        self.assertEqual(resolve_target_groups(self.mock_tagging, "default", "web"), [])

    def test_lookup_error_propagates(self):
        error_response = {'Error': {'Code': 'ThrottlingException', 'Message': 'Rate exceeded'}}
        self.paginator.paginate.side_effect = ClientError(error_response, 'GetResources')

        with self.assertRaises(ClientError):
            resolve_target_groups(self.mock_tagging, "default", "web")

if __name__ == '__main__':
    unittest.main()
