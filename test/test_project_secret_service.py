# pylint: disable=redefined-outer-name
import pytest
from kubernetes import client as k
from kubernetes.client.api_client import ApiClient

from acid_worker.services.exceptions import DecodeError, MalformedSecretError, MalformedSecretsBlobError
from acid_worker.services.project_secret_service import ProjectSecretService
from acid_worker.utilities.encoding_utilities import b64enc


def test_converts_secret_to_project(project_secret_service: ProjectSecretService, project_secret: k.V1Secret):
    p = project_secret_service.decode("default", project_secret)

    assert p.id == "acid-7ef1c9f057b2ec91f887a68671da7bc66c832c28168d28a8dc081e"
    assert p.name == "github.com/deis/test-private-testbed"
    assert p.repo.name == "deis/test-private-testbed"
    assert p.repo.clone_url == "https://github.com/deis/empty-testbed.git"
    assert p.repo.token == "pretend password\n"
    assert p.repo.ssh_key is None
    assert p.kubernetes.namespace == "default"
    assert p.kubernetes.vcs_sidecar == "acidic.azurecr.io/vcs-sidecar:latest"
    assert p.secrets == {"hello": "world"}


def test_project_id_is_stable(project_secret_service: ProjectSecretService, project_secret: k.V1Secret):
    first = project_secret_service.decode("default", project_secret)
    second = project_secret_service.decode("default", project_secret)

    assert first.id == second.id
    assert first.id.startswith("acid-")
    assert project_secret_service.decode("staging", project_secret).id != first.id


def test_decodes_dict_form(
    project_secret_service: ProjectSecretService, project_secret: k.V1Secret, k_api_client: ApiClient
):
    as_dict = k_api_client.sanitize_for_serialization(project_secret)

    p = project_secret_service.decode("default", as_dict)

    assert p.name == "github.com/deis/test-private-testbed"
    assert p.secrets == {"hello": "world"}


def test_decodes_ssh_key(project_secret_service: ProjectSecretService, project_secret: k.V1Secret):
    project_secret.data["sshKey"] = b64enc("SUPER SECRET")

    p = project_secret_service.decode("default", project_secret)

    assert p.repo.ssh_key == "SUPER SECRET"
    assert "SUPER SECRET" not in repr(p)


def test_falls_back_to_repository_without_annotation(
    project_secret_service: ProjectSecretService, project_secret: k.V1Secret
):
    project_secret.metadata.annotations = None

    p = project_secret_service.decode("default", project_secret)

    assert p.repo.name == "deis/test-private-testbed"
    assert p.name == "github.com/deis/test-private-testbed"


def test_defaults_to_no_project_secrets(project_secret_service: ProjectSecretService, project_secret: k.V1Secret):
    del project_secret.data["secrets"]
    del project_secret.data["githubToken"]

    p = project_secret_service.decode("default", project_secret)

    assert p.secrets == {}
    assert p.repo.token is None


def test_non_string_project_secrets_are_json_encoded(
    project_secret_service: ProjectSecretService, project_secret: k.V1Secret
):
    project_secret.data["secrets"] = b64enc('{"port": 8080, "debug": true, "name": "acid"}')

    p = project_secret_service.decode("default", project_secret)

    assert p.secrets == {"port": "8080", "debug": "true", "name": "acid"}


@pytest.mark.parametrize("field", ["cloneURL", "repository", "vcsSidecar"])
def test_missing_required_field(project_secret_service: ProjectSecretService, project_secret: k.V1Secret, field: str):
    del project_secret.data[field]

    with pytest.raises(MalformedSecretError) as exc_info:
        project_secret_service.decode("default", project_secret)
    assert field in str(exc_info.value)


def test_no_data(project_secret_service: ProjectSecretService, project_secret: k.V1Secret):
    project_secret.data = None

    with pytest.raises(MalformedSecretError):
        project_secret_service.decode("default", project_secret)


@pytest.mark.parametrize("field", ["cloneURL", "githubToken", "secrets"])
def test_undecodable_field(project_secret_service: ProjectSecretService, project_secret: k.V1Secret, field: str):
    project_secret.data[field] = "not base64!"

    with pytest.raises(MalformedSecretError) as exc_info:
        project_secret_service.decode("default", project_secret)
    assert isinstance(exc_info.value.__cause__, DecodeError)


@pytest.mark.parametrize("blob", ["{not json", '["hello", "world"]', '"hello"', "42"])
def test_malformed_secrets_blob(project_secret_service: ProjectSecretService, project_secret: k.V1Secret, blob: str):
    project_secret.data["secrets"] = b64enc(blob)

    with pytest.raises(MalformedSecretsBlobError):
        project_secret_service.decode("default", project_secret)
