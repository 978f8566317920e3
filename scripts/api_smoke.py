#!/usr/bin/env python3
import argparse
import json
import random
import string
from pathlib import Path
from typing import Any, Optional

import requests

API_PREFIX = '/api/v1'


def _rand_suffix(length: int = 8) -> str:
    return ''.join(random.choice(string.ascii_lowercase + string.digits) for _ in range(length))


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _record(
    results: list[dict],
    method: str,
    path: str,
    response: requests.Response,
    expected: int,
) -> Any:
    ok = response.status_code == expected
    entry = {
        'method': method,
        'path': path,
        'status': response.status_code,
        'expected': expected,
        'ok': ok,
    }
    if not ok:
        entry['error'] = (response.text or '')[:500]
    results.append(entry)
    return _safe_json(response) if ok else None


def _register_and_login(
    session: requests.Session,
    base_url: str,
    results: list[dict],
    name: str,
) -> Optional[dict]:
    email = f"{name.lower()}+{_rand_suffix()}@skill-exchange.dev"
    payload = {
        'name': name,
        'email': email,
        'password': 'secret123',
        'mobile': '1234567890',
        'age': 25,
        'profession': 'Tester',
    }
    path = f"{API_PREFIX}/auth/register"
    _record(results, 'POST', path, session.post(base_url + path, json=payload), 201)
    path = f"{API_PREFIX}/auth/login"
    login = _record(
        results,
        'POST',
        path,
        session.post(base_url + path, json={'email': email, 'password': 'secret123'}),
        200,
    )
    if not login:
        return None
    return {'Authorization': f"Bearer {login['access_token']}"}


def run_scenario(session: requests.Session, base_url: str) -> list[dict]:
    """Owner uploads a skill, requester matches, requests, is accepted and streams."""
    results: list[dict] = []
    _record(results, 'GET', '/', session.get(base_url + '/'), 200)
    _record(results, 'GET', f"{API_PREFIX}/skills", session.get(f"{base_url}{API_PREFIX}/skills"), 200)

    requester = _register_and_login(session, base_url, results, 'Requester')
    owner = _register_and_login(session, base_url, results, 'Owner')
    stranger = _register_and_login(session, base_url, results, 'Stranger')
    if not (requester and owner and stranger):
        return results

    _record(results, 'GET', f"{API_PREFIX}/me", session.get(f"{base_url}{API_PREFIX}/me", headers=requester), 200)

    topic = f"cooking {_rand_suffix(4)}"
    path = f"{API_PREFIX}/wants"
    _record(results, 'POST', path, session.post(base_url + path, json={'title': topic}, headers=requester), 201)
    _record(results, 'GET', f"{path}/me", session.get(f"{base_url}{path}/me", headers=requester), 200)

    path = f"{API_PREFIX}/skills"
    skill = _record(
        results,
        'POST',
        path,
        session.post(
            base_url + path,
            data={'title': f"{topic.upper()} basics", 'description': 'smoke test'},
            files={'video': ('smoke.mp4', b'smoke-video', 'video/mp4')},
            headers=owner,
        ),
        201,
    )
    if not skill:
        return results
    skill_id = skill['id']

    path = f"{API_PREFIX}/matches"
    matches = _record(results, 'GET', path, session.get(base_url + path, headers=requester), 200) or []
    results.append(
        {'method': 'CHECK', 'path': path, 'ok': any(item['id'] == skill_id for item in matches)}
    )

    stream_path = f"{API_PREFIX}/stream/{skill_id}"
    _record(results, 'GET', stream_path, session.get(base_url + stream_path, headers=requester), 403)

    path = f"{API_PREFIX}/requests/{skill_id}"
    request = _record(results, 'POST', path, session.post(base_url + path, headers=requester), 200)
    if not request:
        return results
    _record(results, 'POST', path, session.post(base_url + path, headers=requester), 409)

    path = f"{API_PREFIX}/requests"
    _record(results, 'GET', path, session.get(base_url + path, params={'type': 'incoming'}, headers=owner), 200)

    path = f"{API_PREFIX}/requests/{request['id']}/accept"
    _record(results, 'POST', path, session.post(base_url + path, headers=stranger), 403)
    _record(results, 'POST', path, session.post(base_url + path, headers=owner), 200)

    _record(results, 'GET', stream_path, session.get(base_url + stream_path, headers=requester), 200)
    _record(results, 'GET', stream_path, session.get(base_url + stream_path, headers=stranger), 403)
    path = f"{API_PREFIX}/authorized"
    _record(results, 'GET', path, session.get(base_url + path, headers=requester), 200)
    return results


def summarize(base_url: str, results: list[dict]) -> dict:
    passed = len([item for item in results if item['ok']])
    return {
        'base_url': base_url,
        'total': len(results),
        'passed': passed,
        'failed': len(results) - passed,
        'results': results,
    }


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='End-to-end smoke test for the skill exchange API')
    parser.add_argument('--base-url', default='http://127.0.0.1:8000')
    parser.add_argument('--output', default=None)
    args = parser.parse_args(argv)

    base_url = args.base_url.rstrip('/')
    try:
        results = run_scenario(requests.Session(), base_url)
    except requests.RequestException as exc:
        print(f"Request failed: {exc}")
        return 1

    summary = summarize(base_url, results)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding='utf-8')

    for item in results:
        if not item['ok']:
            print(f"FAIL {item['method']} {item['path']}: {item.get('status')} {item.get('error', '')}")
    print(f"Total: {summary['total']}, Passed: {summary['passed']}, Failed: {summary['failed']}")
    return 0 if summary['failed'] == 0 else 2


if __name__ == '__main__':
    raise SystemExit(main())
