def test_socket_connect_and_join(sio_client):
    assert sio_client.is_connected('/ws')

    sio_client.emit('join_match', {'matchId': 'abc'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0]['room'] == 'match:abc' for pkt in received)


def test_join_without_match_id_is_an_error(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_match', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_accepted_move_pushes_state_update(client, sio_client):
    res = client.post('/api/init', json={'playerName': 'Alice', 'rowsColumns': 3})
    match_id = res.get_json()['playerData']['matchId']

    sio_client.emit('join_match', {'matchId': match_id}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post('/api/move', json={'playerId': match_id, 'x': 1, 'y': 0})
    events = sio_client.get_received('/ws')
    updates = [e for e in events if e['name'] == 'state_update']
    assert updates
    assert updates[0]['args'][0] == {'matchId': match_id, 'finished': False}


def test_rejected_move_pushes_nothing(client, sio_client):
    res = client.post('/api/init', json={'playerName': 'Alice', 'rowsColumns': 3})
    match_id = res.get_json()['playerData']['matchId']

    sio_client.emit('join_match', {'matchId': match_id}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post('/api/move', json={'playerId': match_id, 'x': 2, 'y': 2})
    events = sio_client.get_received('/ws')
    assert not any(e['name'] == 'state_update' for e in events)


def test_leave_match(sio_client):
    sio_client.emit('join_match', {'matchId': 'abc'}, namespace='/ws')
    sio_client.emit('leave_match', {'matchId': 'abc'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'left' for pkt in received)
