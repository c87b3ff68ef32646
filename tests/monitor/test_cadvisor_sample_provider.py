import logging
import unittest
from unittest.mock import MagicMock, patch

import requests

from tests.config.test_property_provider import TestPropertyProvider
from tests.utils import config_logs, get_test_stats, DEFAULT_TEST_CADVISOR_URL
from cadvisor_monitor.config.config_manager import ConfigManager
from cadvisor_monitor.config.constants import CADVISOR_URL, CADVISOR_TIMEOUT_SEC, DEFAULT_CADVISOR_URL, \
    DEFAULT_CADVISOR_TIMEOUT_SEC
from cadvisor_monitor.monitor.cadvisor_sample_provider import CAdvisorSampleProvider
from cadvisor_monitor.monitor.cpu_usage_calculator import CpuUsageCalculator
from cadvisor_monitor.monitor.errors import FetchError, DecodeError, FETCH_ERROR, DECODE_ERROR
from cadvisor_monitor.utils import set_config_manager

config_logs(logging.DEBUG)

REQUESTS_GET = 'cadvisor_monitor.monitor.cadvisor_sample_provider.requests.get'


def get_test_body():
    return {
        "/docker/c1": {
            "name": "/docker/c1",
            "aliases": ["web", "c1"],
            "stats": get_test_stats([1000000000, 1500000000])
        },
        "/docker/c2": {
            "name": "/docker/c2",
            "stats": get_test_stats([2000000000, 2100000000, 2400000000])
        }
    }


def get_response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = body
    return response


class TestCAdvisorSampleProvider(unittest.TestCase):

    def tearDown(self):
        set_config_manager(ConfigManager(TestPropertyProvider({})))

    def test_default_config(self):
        provider = CAdvisorSampleProvider()
        self.assertEqual(DEFAULT_CADVISOR_URL, provider.get_url())
        self.assertEqual(DEFAULT_CADVISOR_TIMEOUT_SEC, provider.get_timeout())

    def test_configured_url_and_timeout(self):
        set_config_manager(ConfigManager(TestPropertyProvider({
            CADVISOR_URL: DEFAULT_TEST_CADVISOR_URL,
            CADVISOR_TIMEOUT_SEC: '1.5'
        })))
        provider = CAdvisorSampleProvider()
        self.assertEqual(DEFAULT_TEST_CADVISOR_URL, provider.get_url())
        self.assertEqual(1.5, provider.get_timeout())

        provider = CAdvisorSampleProvider(url="http://other:8080/api/v1.3/docker/", timeout=3)
        self.assertEqual("http://other:8080/api/v1.3/docker/", provider.get_url())
        self.assertEqual(3, provider.get_timeout())

    def test_parse_response(self):
        container_samples = CAdvisorSampleProvider.parse_response(get_test_body())
        self.assertEqual(2, len(container_samples))

        c1 = container_samples["/docker/c1"]
        self.assertEqual(2, len(c1))
        self.assertEqual("2023-11-14T22:13:20.000000000Z", c1[0].get_timestamp())
        self.assertEqual(1000000000, c1[0].get_cumulative_cpu_usage_nanos())
        self.assertEqual(1500000000, c1[1].get_cumulative_cpu_usage_nanos())

        c2 = container_samples["/docker/c2"]
        self.assertEqual(3, len(c2))
        self.assertEqual("2023-11-14T22:13:22.000000000Z", c2[2].get_timestamp())
        self.assertEqual(2400000000, c2[2].get_cumulative_cpu_usage_nanos())

    def test_parse_missing_stats(self):
        container_samples = CAdvisorSampleProvider.parse_response({
            "/docker/c1": {"name": "/docker/c1"},
            "/docker/c2": {"name": "/docker/c2", "stats": None}
        })
        self.assertEqual([], container_samples["/docker/c1"])
        self.assertEqual([], container_samples["/docker/c2"])

    def test_parse_malformed_response(self):
        malformed = [
            [],
            "body",
            {"/docker/c1": "info"},
            {"/docker/c1": {"stats": "stats"}},
            {"/docker/c1": {"stats": [{"timestamp": "2023-11-14T22:13:20Z"}]}},
            {"/docker/c1": {"stats": [{"cpu": {"usage": {"total": 1}}}]}},
            {"/docker/c1": {"stats": [{"timestamp": "2023-11-14T22:13:20Z", "cpu": {"usage": None}}]}},
            {"/docker/c1": {"stats": [{"timestamp": 1700000000, "cpu": {"usage": {"total": 1}}}]}},
            {"/docker/c1": {"stats": [{"timestamp": "2023-11-14T22:13:20Z", "cpu": {"usage": {"total": "1"}}}]}},
            {"/docker/c1": {"stats": [None]}},
        ]
        for body in malformed:
            with self.assertRaises(DecodeError):
                CAdvisorSampleProvider.parse_response(body)

    @patch(REQUESTS_GET)
    def test_get_samples(self, mock_get):
        mock_get.return_value = get_response(body=get_test_body())

        provider = CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL, timeout=2.0)
        container_samples = provider.get_samples()
        self.assertEqual(2, len(container_samples))

        args, kwargs = mock_get.call_args
        self.assertEqual(DEFAULT_TEST_CADVISOR_URL, args[0])
        self.assertEqual(2.0, kwargs["timeout"])

    @patch(REQUESTS_GET)
    def test_transport_failure(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")
        with self.assertRaises(FetchError):
            CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL).get_samples()

        mock_get.side_effect = requests.exceptions.Timeout("timed out")
        with self.assertRaises(FetchError):
            CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL).get_samples()

    @patch(REQUESTS_GET)
    def test_failure_status(self, mock_get):
        mock_get.return_value = get_response(status_code=500, text="internal error")
        with self.assertRaises(FetchError):
            CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL).get_samples()

    @patch(REQUESTS_GET)
    def test_invalid_json(self, mock_get):
        response = get_response()
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        mock_get.return_value = response
        with self.assertRaises(DecodeError):
            CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL).get_samples()

    @patch(REQUESTS_GET)
    def test_calculator_over_cadvisor(self, mock_get):
        mock_get.return_value = get_response(body=get_test_body())
        calculator = CpuUsageCalculator(CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL))

        # c1: 0.5s over 1s, c2: 0.3s over 1s
        self.assertEqual(80.0, calculator.get_total_cpu_usage_percent())

    @patch(REQUESTS_GET)
    def test_calculator_fails_open_over_cadvisor(self, mock_get):
        calculator = CpuUsageCalculator(CAdvisorSampleProvider(url=DEFAULT_TEST_CADVISOR_URL))

        mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")
        self.assertEqual(0.0, calculator.get_total_cpu_usage_percent())
        self.assertEqual(FETCH_ERROR, calculator.get_total_cpu_usage().get_error_kind())

        mock_get.side_effect = None
        mock_get.return_value = get_response(body=["not", "a", "map"])
        self.assertEqual(0.0, calculator.get_total_cpu_usage_percent())
        self.assertEqual(DECODE_ERROR, calculator.get_total_cpu_usage().get_error_kind())
        self.assertEqual(4, calculator.get_failure_count())
