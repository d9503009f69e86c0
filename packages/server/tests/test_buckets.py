"""
Integration tests for buckets, questions and answers.

Tests cover:
- Owner bootstrap, joining public and private buckets, approval and removal
- Member-only questions and answers
- Owner-only deletes
"""

from __future__ import annotations

import uuid


async def _bucket(client, account, is_public=True, name="Q&A"):
    response = await client.post(
        "/api/v1/bucket/", json={"bucket_name": name, "is_public": is_public}, headers=account.headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _users(client, bucket):
    return [u["user_name"] for u in (await client.get(f"/api/v1/bucket/{bucket['uuid']}/users")).json()]


async def _ask(client, account, bucket, text="Why?"):
    return await client.post(
        "/api/v1/question/",
        json={"bucket_uuid": bucket["uuid"], "question_text": text},
        headers=account.headers,
    )


class TestMembership:
    async def test_creator_is_owner(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        assert await _users(client, bucket) == ["alice"]
        assert (await client.get(f"/api/v1/bucket/{bucket['uuid']}/is_owner", headers=alice.headers)).json() is True
        assert (await client.get(f"/api/v1/bucket/{bucket['uuid']}/is_owner", headers=bob.headers)).json() is False

    async def test_public_bucket_approves_immediately(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        response = await client.post(f"/api/v1/bucket/{bucket['uuid']}/join", headers=bob.headers)
        assert response.status_code == 204
        assert await _users(client, bucket) == ["alice", "bob"]

    async def test_private_bucket_needs_approval(self, client, alice, bob):
        bucket = await _bucket(client, alice, is_public=False)
        await client.post(f"/api/v1/bucket/{bucket['uuid']}/join", headers=bob.headers)
        assert await _users(client, bucket) == ["alice"]

        response = await client.put(
            f"/api/v1/bucket/{bucket['uuid']}/approve/{bob.uuid}", headers=bob.headers
        )
        assert response.status_code == 403

        response = await client.put(
            f"/api/v1/bucket/{bucket['uuid']}/approve/{bob.uuid}", headers=alice.headers
        )
        assert response.status_code == 204
        assert await _users(client, bucket) == ["alice", "bob"]

    async def test_owner_removes_member(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        await client.post(f"/api/v1/bucket/{bucket['uuid']}/join", headers=bob.headers)
        response = await client.delete(
            f"/api/v1/bucket/{bucket['uuid']}/user/{bob.uuid}", headers=alice.headers
        )
        assert response.status_code == 204
        assert await _users(client, bucket) == ["alice"]

    async def test_public_listing(self, client, alice):
        await _bucket(client, alice, name="open")
        await _bucket(client, alice, is_public=False, name="closed")
        page = (await client.get("/api/v1/bucket/public/0/10")).json()
        assert [b["bucket_name"] for b in page["data"]] == ["open"]
        assert page["pagination"]["total_count"] == 1

    async def test_unknown_bucket(self, client):
        assert (await client.get(f"/api/v1/bucket/{uuid.uuid4()}")).status_code == 404


class TestQuestions:
    async def test_non_member_cannot_ask(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        response = await _ask(client, bob, bucket)
        assert response.status_code == 403

    async def test_question_with_answers(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        await client.post(f"/api/v1/bucket/{bucket['uuid']}/join", headers=bob.headers)
        question = (await _ask(client, bob, bucket)).json()
        assert question["author"]["user_name"] == "bob"
        assert question["answers"] == []

        response = await client.post(
            "/api/v1/answer/",
            json={"question_uuid": question["uuid"], "answer_text": "Because."},
            headers=alice.headers,
        )
        assert response.status_code == 201
        answer = response.json()

        fetched = (await client.get(f"/api/v1/question/{question['uuid']}")).json()
        assert [a["uuid"] for a in fetched["answers"]] == [answer["uuid"]]

        answers = (await client.get(f"/api/v1/answer/question/{question['uuid']}")).json()
        assert answers[0]["answer_text"] == "Because."

        page = (await client.get(f"/api/v1/question/bucket/{bucket['uuid']}/0/10")).json()
        assert page["data"][0]["answers"][0]["uuid"] == answer["uuid"]

    async def test_only_author_deletes(self, client, alice, bob):
        bucket = await _bucket(client, alice)
        question = (await _ask(client, alice, bucket)).json()
        assert (await client.delete(f"/api/v1/question/{question['uuid']}", headers=bob.headers)).status_code == 403

        response = await client.delete(f"/api/v1/question/{question['uuid']}", headers=alice.headers)
        assert response.status_code == 200
        assert (await client.get(f"/api/v1/question/{question['uuid']}")).status_code == 404

    async def test_answer_delete_by_author(self, client, alice):
        bucket = await _bucket(client, alice)
        question = (await _ask(client, alice, bucket)).json()
        answer = (await client.post(
            "/api/v1/answer/", json={"question_uuid": question["uuid"]}, headers=alice.headers
        )).json()
        assert answer["answer_text"] is None
        response = await client.delete(f"/api/v1/answer/{answer['uuid']}", headers=alice.headers)
        assert response.status_code == 200
        assert (await client.get(f"/api/v1/answer/question/{question['uuid']}")).json() == []
