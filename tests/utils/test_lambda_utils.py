"""
Unit tests for lambda utilities.
"""
import unittest
import json
from datetime import date
from decimal import Decimal
from utils.lambda_utils import (
    DecimalEncoder,
    create_response,
    handle_error,
    parse_json_body
)

class TestLambdaUtils(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        self.sample_event = {
            'body': json.dumps({
                'transactions': [],
                'runDate': '2024-12-31',
                'empty': ''
            })
        }

    def test_decimal_encoder(self):
        """Test DecimalEncoder class."""
        # Decimals keep their exact digits
        data = {'amount': Decimal('100.50')}
        encoded = json.dumps(data, cls=DecimalEncoder)
        self.assertEqual(encoded, '{"amount": "100.50"}')

        # Dates use ISO format
        data = {'day': date(2024, 10, 1)}
        encoded = json.dumps(data, cls=DecimalEncoder)
        self.assertEqual(encoded, '{"day": "2024-10-01"}')

        # Test regular types
        data = {'name': 'test', 'active': True}
        encoded = json.dumps(data, cls=DecimalEncoder)
        self.assertEqual(encoded, '{"name": "test", "active": true}')

        # Test unsupported type
        class UnsupportedType:
            pass
        data = {'unsupported': UnsupportedType()}
        with self.assertRaises(TypeError):
            json.dumps(data, cls=DecimalEncoder)

    def test_create_response(self):
        """Test create_response function."""
        response = create_response(200, {'totalAnnualized': Decimal('185.88')})
        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(response['headers']['Content-Type'], 'application/json')
        self.assertEqual(response['headers']['Access-Control-Allow-Origin'], '*')
        self.assertEqual(response['headers']['Access-Control-Allow-Methods'], 'POST,OPTIONS')
        self.assertEqual(json.loads(response['body']), {'totalAnnualized': '185.88'})

    def test_handle_error(self):
        """Test handle_error function."""
        response = handle_error(404, 'Unsupported route')
        self.assertEqual(response['statusCode'], 404)
        self.assertEqual(json.loads(response['body']), {'message': 'Unsupported route'})

    def test_parse_json_body(self):
        """Test parse_json_body function."""
        self.assertEqual(parse_json_body(self.sample_event)['runDate'], '2024-12-31')
        self.assertEqual(parse_json_body({}), {})
        self.assertEqual(parse_json_body({'body': None}), {})

        with self.assertRaises(ValueError):
            parse_json_body({'body': '{not json'})
        with self.assertRaises(ValueError):
            parse_json_body({'body': '[1, 2]'})


if __name__ == '__main__':
    unittest.main()
