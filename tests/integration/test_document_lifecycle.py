"""Integration tests for a document's life on a pod: upload, share, revoke and delete."""

import pytest

from common.types import AccessModes
from documents import (
    DocumentNotFoundError,
    delete_document,
    fetch_document_metadata,
    fetch_documents,
    get_doc_acl_permission,
    set_doc_acl_permission,
    upload_document,
)
from tests.fake_pod import ALICE_ROOT, ALICE_WEBID

PASSPORT = f'{ALICE_ROOT}Passport/'


@pytest.mark.asyncio
async def test_passport_lifecycle(alice, bob, fake_pod, config):
    """Test a passport uploaded by alice, shared with bob, then removed."""
    result = await upload_document(alice, {
        'type': 'Passport',
        'date': '2024-01-01',
        'description': 'Scanned passport',
        'file_name': 'passport.pdf',
        'content': b'%PDF-1.4',
    }, config=config)

    assert result.file_url == f'{PASSPORT}passport.pdf'
    assert await fetch_documents(alice, 'Passport', 'self-fetch', config=config) == PASSPORT

    with pytest.raises(DocumentNotFoundError):
        await fetch_documents(bob, 'Passport', 'cross-fetch', other_pod='alice', config=config)

    await set_doc_acl_permission(alice, 'Passport', 'Give', 'bob', config=config)
    assert await get_doc_acl_permission(alice, 'Passport', 'bob', config=config) == AccessModes(read=True)

    records = await fetch_document_metadata(bob, 'Passport', 'cross-fetch', other_pod='alice', config=config)
    assert [(r.name, r.identifier, r.end_date) for r in records] == [('passport.pdf', 'Passport', '2024-01-01')]

    await set_doc_acl_permission(alice, 'Passport', 'Revoke', 'bob', config=config)
    with pytest.raises(DocumentNotFoundError):
        await fetch_documents(bob, 'Passport', 'cross-fetch', other_pod='alice', config=config)

    assert await delete_document(alice, 'Passport', config=config) == PASSPORT
    assert not fake_pod.exists(PASSPORT)

    with pytest.raises(DocumentNotFoundError):
        await fetch_documents(alice, 'Passport', 'self-fetch', config=config)


@pytest.mark.asyncio
async def test_document_types_are_isolated(alice, fake_pod, config):
    """Test each type gets its own container and ACL."""
    for doc_type in ('Bank Statement', 'Passport', 'Drivers License'):
        await upload_document(alice, {
            'type': doc_type,
            'date': '2025-01-31',
            'file_name': 'scan.pdf',
            'content': b'scan',
        }, config=config)

    await set_doc_acl_permission(alice, 'Bank Statement', 'Give', 'bob', config=config)
    await delete_document(alice, 'Passport', config=config)

    assert fake_pod.children(ALICE_ROOT) == [
        f'{ALICE_ROOT}Bank%20Statement/',
        f'{ALICE_ROOT}Drivers%20License/',
    ]
    assert await get_doc_acl_permission(alice, 'Drivers License', 'bob', config=config) == AccessModes()
    assert await get_doc_acl_permission(alice, 'Bank Statement', 'bob', config=config) == AccessModes(read=True)
    assert fake_pod.owners[ALICE_ROOT] == ALICE_WEBID
