# tests/domains/test_member.py

"""
'member' 도메인 (회원 가입, 조회, 이름 변경) 관련 테스트 모듈입니다.
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import DuplicateMemberError, MemberNotFoundError
from app.domains.member import crud as member_crud
from app.domains.member import models as member_models
from app.domains.shared.models import Address


# =================================================================================
# 1. CRUD 테스트
# =================================================================================
@pytest.mark.asyncio
async def test_join_saves_member_with_address(db_session: AsyncSession):
    """(성공) 회원 가입 후 같은 회원을 다시 조회할 수 있다"""
    address = Address(city="서울", street="강가", zipcode="123-123")
    member = await member_crud.member.join(db_session, name="kim", address=address)

    found = await member_crud.member.get_or_404(db_session, member.id)
    assert found.name == "kim"
    assert found.address == address


@pytest.mark.asyncio
async def test_join_without_address_stores_empty_address(db_session: AsyncSession):
    member = await member_crud.member.join(db_session, name="lee")
    assert member.address == Address()


@pytest.mark.asyncio
async def test_join_duplicate_name_raises(db_session: AsyncSession):
    """(실패) 같은 이름으로 두 번 가입하면 예외가 발생한다"""
    await member_crud.member.join(db_session, name="kim")

    with pytest.raises(DuplicateMemberError):
        await member_crud.member.join(db_session, name="kim")

    assert len(await member_crud.member.get_by_name(db_session, name="kim")) == 1


@pytest.mark.asyncio
async def test_get_or_404_missing_member_raises(db_session: AsyncSession):
    with pytest.raises(MemberNotFoundError) as exc_info:
        await member_crud.member.get_or_404(db_session, 424242)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_update_name_to_taken_name_raises(db_session: AsyncSession, member_factory):
    await member_factory("kim")
    lee = await member_factory("lee")

    with pytest.raises(DuplicateMemberError):
        await member_crud.member.update_name(db_session, id=lee.id, name="kim")


# =================================================================================
# 2. API 테스트
# =================================================================================
@pytest.mark.asyncio
async def test_save_member_v1(client: AsyncClient, db_session: AsyncSession):
    """(성공) V1: 엔티티 모양의 바디로 가입"""
    payload = {"name": "kim", "address": {"city": "서울", "street": "1", "zipcode": "1111"}}
    response = await client.post("/api/v1/members", json=payload)

    assert response.status_code == 200
    member_id = response.json()["id"]
    member = await db_session.get(member_models.Member, member_id)
    assert member.name == "kim"
    assert member.city == "서울"


@pytest.mark.asyncio
async def test_save_member_v2(client: AsyncClient):
    response = await client.post("/api/v2/members", json={"name": "hello"})
    assert response.status_code == 200
    assert isinstance(response.json()["id"], int)


@pytest.mark.asyncio
async def test_save_member_with_empty_name_is_rejected(client: AsyncClient):
    """(실패) 이름이 비어 있으면 422"""
    response = await client.post("/api/v2/members", json={"name": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_save_duplicate_member_returns_409(client: AsyncClient, test_member: member_models.Member):
    """(실패) 중복 회원은 409"""
    response = await client.post("/api/v2/members", json={"name": test_member.name})
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


@pytest.mark.asyncio
async def test_members_v1_exposes_entity_shape(client: AsyncClient, member_factory):
    await member_factory("kim", city="서울", street="1", zipcode="1111")
    await member_factory("lee")

    response = await client.get("/api/v1/members")

    assert response.status_code == 200
    body = response.json()
    assert isinstance(body, list)
    assert [m["name"] for m in body] == ["kim", "lee"]
    assert body[0]["address"] == {"city": "서울", "street": "1", "zipcode": "1111"}


@pytest.mark.asyncio
async def test_members_v2_wraps_names_in_result(client: AsyncClient, member_factory):
    await member_factory("kim")
    await member_factory("lee")

    response = await client.get("/api/v2/members")

    assert response.status_code == 200
    assert response.json() == {"data": [{"name": "kim"}, {"name": "lee"}]}


@pytest.mark.asyncio
async def test_update_member_v2(client: AsyncClient, test_member: member_models.Member):
    response = await client.post(f"/api/v2/members/{test_member.id}", json={"name": "park"})

    assert response.status_code == 200
    assert response.json() == {"id": test_member.id, "name": "park"}


@pytest.mark.asyncio
async def test_update_unknown_member_returns_404(client: AsyncClient):
    response = await client.post("/api/v2/members/999999", json={"name": "park"})
    assert response.status_code == 404
