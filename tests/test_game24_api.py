from make24.games.game24.logic.evaluator import safe_eval


def test_home_lists_endpoints(client):
    r = client.get("/")
    assert r.status_code == 200
    game = r.get_json()["games"][0]
    assert game["key"] == "game24"
    assert game["endpoints"]["next"] == "/games/game24/api/next"


def test_next_deals_solvable_easy_hand(client):
    r = client.get("/games/game24/api/next")
    assert r.status_code == 200
    j = r.get_json()
    assert j["ok"] is True
    assert j["difficulty"] == "Easy"
    assert len(j["cards"]) == 4
    assert len({c["id"] for c in j["cards"]}) == 4
    assert all(1 <= v <= 10 for v in j["values"])
    assert j["solvable"] is True
    assert j["daily_score"] == 0
    assert {c["color"] for c in j["cards"]} <= {"red", "black"}
    assert "session_id" in r.headers.get("Set-Cookie", "")


def test_next_with_seed_is_reproducible(app):
    one = app.test_client().get("/games/game24/api/next?difficulty=hard&seed=11").get_json()
    two = app.test_client().get("/games/game24/api/next?difficulty=hard&seed=11").get_json()
    assert one["values"] == two["values"]
    assert one["difficulty"] == "Hard"


def test_next_rejects_unknown_difficulty(client):
    r = client.get("/games/game24/api/next?difficulty=nightmare")
    assert r.status_code == 400
    assert r.get_json()["ok"] is False


def test_redeal_without_interaction_counts_swap(client):
    client.get("/games/game24/api/next")
    j = client.get("/games/game24/api/next").get_json()
    assert j["stats"]["deal_swaps"] == 1


def test_help_hint_and_solve(client):
    r = client.post("/games/game24/api/help", json={"values": [4, 1, 8, 7], "kind": "hint"})
    j = r.get_json()
    assert j["ok"] is True and j["has_solution"] is True
    assert j["hint"]
    assert j["stats"]["help_hint"] == 1

    r = client.post("/games/game24/api/help", json={"values": [4, 1, 8, 7], "kind": "solve"})
    j = r.get_json()
    assert abs(safe_eval(j["solution"]) - 24) < 1e-4
    assert j["message"] == f"Solution: {j['solution']}"
    assert j["stats"]["revealed"] == 1


def test_help_for_impossible_hand(client):
    j = client.post("/games/game24/api/help", json={"values": [1, 1, 1, 1]}).get_json()
    assert j["ok"] is True
    assert j["has_solution"] is False
    assert j["message"] == "Impossible set. Skipping..."


def test_help_rejects_bad_input(client):
    assert client.post("/games/game24/api/help", json={"values": "x,y"}).status_code == 400
    assert client.post("/games/game24/api/help", json={"values": [1, 2, 3, 4], "kind": "cheat"}).status_code == 400


def _deal_and_solve(client, seed):
    hand = client.get(f"/games/game24/api/next?seed={seed}").get_json()
    solution = client.get(
        "/games/game24/api/solve", query_string={"values": ",".join(map(str, hand["values"]))}
    ).get_json()["solution"]
    return hand, solution


def test_check_correct_answer_bumps_daily_score(client):
    hand, solution = _deal_and_solve(client, 3)

    j = client.post("/games/game24/api/check", json={"values": hand["values"], "answer": solution}).get_json()
    assert j["ok"] is True
    assert j["counted"] is True
    assert j["daily_score"] == 1
    assert j["stats"]["solved"] == 1
    assert client.get("/games/game24/api/score").get_json()["daily_score"] == 1

    hand, solution = _deal_and_solve(client, 4)
    j = client.post("/games/game24/api/check", json={"answer": solution}).get_json()
    assert j["daily_score"] == 2
    assert j["stats"]["solved"] == 2


def test_resubmitting_a_solved_hand_counts_once(client):
    _, solution = _deal_and_solve(client, 3)
    for _ in range(5):
        j = client.post("/games/game24/api/check", json={"answer": solution}).get_json()
        assert j["ok"] is True
        assert j["daily_score"] == 1
        assert j["stats"]["solved"] == 1
    assert j["counted"] is False
    assert j["elapsed"] is None


def test_check_on_other_values_does_not_score(client):
    client.get("/games/game24/api/next?seed=3")
    j = client.post("/games/game24/api/check", json={"values": [4, 1, 8, 7], "answer": "8*(7-4*1)"}).get_json()
    assert j["ok"] is True
    assert j["counted"] is False
    assert j["daily_score"] == 0
    assert j["stats"]["solved"] == 0

    client.post("/games/game24/api/skip")
    j = client.post("/games/game24/api/check", json={"values": [4, 1, 8, 7], "answer": "8*(7-4*1)"}).get_json()
    assert j["daily_score"] == 0


def test_check_uses_current_hand_when_values_omitted(client):
    hand = client.get("/games/game24/api/next?seed=3").get_json()
    solution = client.get(
        "/games/game24/api/solve", query_string={"values": ",".join(map(str, hand["values"]))}
    ).get_json()["solution"]
    j = client.post("/games/game24/api/check", json={"answer": solution}).get_json()
    assert j["ok"] is True
    assert j["elapsed"] is not None


def test_check_wrong_answer(client):
    j = client.post("/games/game24/api/check", json={"values": [4, 1, 8, 7], "answer": "(4-1)*8+7"}).get_json()
    assert j["ok"] is False
    assert j["reason"] == "Equals 31. Try again!"
    assert j["stats"]["answer_wrong"] == 1


def test_check_no_solution_claim(client):
    j = client.post("/games/game24/api/check", json={"values": [1, 1, 1, 1], "answer": "no solution"}).get_json()
    assert j["ok"] is True
    assert j["kind"] == "no-solution"


def test_check_requires_values_and_answer(client):
    assert client.post("/games/game24/api/check", json={"answer": "1+2"}).status_code == 400
    assert client.post("/games/game24/api/check", json={"values": [1, 2, 3, 4]}).status_code == 400


def test_solve_endpoint(client):
    j = client.get("/games/game24/api/solve?values=1,2,3,4").get_json()
    assert j["solvable"] is True
    assert j["solution"] == "4 × (3 + 1 + 2)"
    assert j["first_step_hint"] == "1 + 2"
    assert client.get("/games/game24/api/solve?values=").status_code == 400


def test_skip_and_restart(client):
    client.get("/games/game24/api/next")
    j = client.post("/games/game24/api/skip").get_json()
    assert j["stats"]["skipped"] == 1
    assert j["stats"]["played"] == 1

    j = client.post("/games/game24/api/restart").get_json()
    assert j["stats"]["skipped"] == 0
