from unittest import mock

import pytest
import requests

from financeio.defaults import STORAGE_OFFLINE_DATA
from financeio.exceptions import OfflineDataUnavailable
from financeio.offline import LocalStorage, OfflineSyncClient

BASE_URL = 'http://localhost:3000'


def _response(payload=None, status=200):
    response = mock.Mock()
    response.status_code = status
    response.content = b'{}'
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status} Error')
    return response


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / 'storage.json'))


@pytest.fixture
def session():
    return mock.Mock()


@pytest.fixture
def client(storage, session):
    ticks = iter(range(1, 100))
    return OfflineSyncClient(BASE_URL, storage, session=session, clock=lambda: next(ticks))


def test_local_storage_roundtrip(storage, tmp_path):
    storage.set_item('a', {'x': [1, 2]})
    assert LocalStorage(str(tmp_path / 'storage.json')).get_item('a') == {'x': [1, 2]}
    storage.remove_item('a')
    assert storage.get_item('a') is None
    assert storage.keys() == []


def test_corrupted_storage_is_ignored(tmp_path):
    path = tmp_path / 'storage.json'
    path.write_text('{not json', encoding='utf-8')
    assert LocalStorage(str(path)).get_item('a', 'default') == 'default'


def test_offline_post_is_queued(client, session, storage):
    session.request.side_effect = requests.ConnectionError()

    result = client.post('/api/transactions/', json={'description': 'Mercado'})

    assert result == {'status': 'offline', 'message': 'Dados serão sincronizados quando houver conexão'}
    assert storage.get_item(STORAGE_OFFLINE_DATA) == [{
        'url': f'{BASE_URL}/api/transactions/',
        'method': 'POST',
        'data': {'description': 'Mercado'},
        'timestamp': 1000,
    }]


def test_offline_delete_is_not_queued(client, session):
    session.request.side_effect = requests.ConnectionError()
    with pytest.raises(requests.ConnectionError):
        client.delete('/api/transactions/1')
    assert client.pending() == []


def test_get_falls_back_to_cache(client, session):
    session.request.return_value = _response({'transactions': []})
    assert client.get('/api/transactions/') == {'transactions': []}

    session.request.side_effect = requests.Timeout()
    assert client.get('/api/transactions/') == {'transactions': []}

    with pytest.raises(OfflineDataUnavailable):
        client.get('/api/categories/')


def test_sync_replays_in_timestamp_order(client, session, storage):
    storage.set_item(STORAGE_OFFLINE_DATA, [
        {'url': f'{BASE_URL}/b', 'method': 'PUT', 'data': {'n': 2}, 'timestamp': 20},
        {'url': f'{BASE_URL}/a', 'method': 'POST', 'data': {'n': 1}, 'timestamp': 10},
    ])
    session.request.return_value = _response({})

    result = client.sync()

    assert result.synced == 2
    assert result.remaining == 0
    assert [c.args[:2] for c in session.request.call_args_list] == [
        ('POST', f'{BASE_URL}/a'), ('PUT', f'{BASE_URL}/b'),
    ]
    assert STORAGE_OFFLINE_DATA not in storage.keys()


def test_sync_keeps_failed_requests(client, session, storage):
    storage.set_item(STORAGE_OFFLINE_DATA, [
        {'url': f'{BASE_URL}/a', 'method': 'POST', 'data': {}, 'timestamp': 1},
        {'url': f'{BASE_URL}/b', 'method': 'POST', 'data': {}, 'timestamp': 2},
        {'url': f'{BASE_URL}/c', 'method': 'POST', 'data': {}, 'timestamp': 3},
    ])
    session.request.side_effect = [_response({}), _response(status=500), requests.ConnectionError()]

    result = client.sync()

    assert result.synced == 1
    assert [item['url'] for item in storage.get_item(STORAGE_OFFLINE_DATA)] == [f'{BASE_URL}/b', f'{BASE_URL}/c']
    assert result.to_string() == 'Sincronizados: 1 | Pendentes: 2'


def test_sync_with_empty_queue(client, session):
    assert client.sync().synced == 0
    session.request.assert_not_called()


def test_sync_does_not_replay_requests_after_other_request_errors(client, session, storage):
    storage.set_item(STORAGE_OFFLINE_DATA, [
        {'url': f'{BASE_URL}/a', 'method': 'POST', 'data': {}, 'timestamp': 1},
        {'url': f'{BASE_URL}/b', 'method': 'POST', 'data': {}, 'timestamp': 2},
        {'data': {}, 'timestamp': 3},
    ])
    session.request.side_effect = [_response({}), requests.TooManyRedirects()]

    result = client.sync()

    assert result.synced == 1
    assert storage.get_item(STORAGE_OFFLINE_DATA) == [
        {'url': f'{BASE_URL}/b', 'method': 'POST', 'data': {}, 'timestamp': 2},
        {'data': {}, 'timestamp': 3},
    ]


def test_sync_saves_progress_on_unexpected_errors(client, session, storage):
    storage.set_item(STORAGE_OFFLINE_DATA, [
        {'url': f'{BASE_URL}/a', 'method': 'POST', 'data': {}, 'timestamp': 1},
        {'url': f'{BASE_URL}/b', 'method': 'POST', 'data': {}, 'timestamp': 2},
        {'url': f'{BASE_URL}/c', 'method': 'POST', 'data': {}, 'timestamp': 3},
    ])
    session.request.side_effect = [_response({}), RuntimeError('boom')]

    with pytest.raises(RuntimeError):
        client.sync()

    assert [item['url'] for item in storage.get_item(STORAGE_OFFLINE_DATA)] == [f'{BASE_URL}/b', f'{BASE_URL}/c']
