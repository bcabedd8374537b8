#!/usr/bin/env python
"""Manual smoke test: post one inquiry to a running backend.

Usage: python scripts/send_test_inquiry.py <LINE user id> [base url]
"""
from datetime import date, timedelta
import sys

import requests

if len(sys.argv) < 2:
    print("Usage: python scripts/send_test_inquiry.py <LINE user id> [base url]")
    sys.exit(1)

user_id = sys.argv[1]
base_url = sys.argv[2] if len(sys.argv) > 2 else 'http://localhost:3000'

data = {
    'company': 'Acme Co',
    'contact': 'Jane Doe',
    'phone': '081-234-5678',
    'product': 'Widgets',
    'quantity': 500,
    'budget': '$10k',
    'deadline': (date.today() + timedelta(days=10)).isoformat(),
    'notes': 'Smoke test submission',
    'userId': user_id,
}

try:
    response = requests.post(f'{base_url}/liff-submit', json=data, timeout=30)
    print(f"Status Code: {response.status_code}")
    print(response.json())
    if response.ok:
        print("✓ Form submitted successfully")
    else:
        print("✗ Submission was not accepted")
except requests.exceptions.RequestException as e:
    print(f"✗ Error: {e}")
    sys.exit(1)
