import pytest
from pydantic import ValidationError

from devops_shared.models.events import (
    DevopsEnvelope,
    PipelineFailureNotification,
    PullRequestNotification,
    SourceCommit,
)


def test_envelope_defaults_missing_payload() -> None:
    """
    Given: payload가 없거나 null인 메시지
    When: DevopsEnvelope로 파싱
    Then: payload는 빈 dict
    """
    assert DevopsEnvelope.model_validate_json('{"type": "codebuild"}').payload == {}
    assert DevopsEnvelope.model_validate_json('{"type": "codebuild", "payload": null}').payload == {}


def test_envelope_rejects_malformed_json() -> None:
    """
    Given: JSON이 아닌 메시지 본문
    When: DevopsEnvelope로 파싱
    Then: ValidationError 발생
    """
    with pytest.raises(ValidationError):
        DevopsEnvelope.model_validate_json("not-json{")


def test_source_commit_template_params_use_camel_case() -> None:
    """
    Given: Source 액션 출력 변수
    When: SourceCommit 생성 후 템플릿 파라미터 변환
    Then: 원본 camelCase 키로 직렬화됨
    """
    commit = SourceCommit.from_output_variables(
        {
            "BranchName": "main",
            "CommitId": "abc123",
            "CommitMessage": "msg",
            "CommitterDate": "2024-05-01T10:00:00Z",
            "RepositoryName": "repo",
        }
    )
    assert commit.template_params() == {
        "branchName": "main",
        "commitId": "abc123",
        "commitMessage": "msg",
        "committerDate": "2024-05-01T10:00:00Z",
        "repositoryName": "repo",
    }


def test_pipeline_failure_params_add_author_and_committer_names() -> None:
    """
    Given: 커밋 설명자와 조회된 커밋 작성자 정보
    When: PipelineFailed 템플릿 파라미터 생성
    Then: authorName, committerName이 추가되고 이메일은 포함되지 않음
    """
    commit = SourceCommit(commitId="abc123", repositoryName="repo")
    notification = PipelineFailureNotification(
        commit=commit, authorName="Ann", committerName="Cid", committerEmail="cid@example.com"
    )
    params = notification.template_params()
    assert params["authorName"] == "Ann"
    assert params["committerName"] == "Cid"
    assert params["commitId"] == "abc123"
    assert "committerEmail" not in params


def test_envelope_coerces_mistyped_fields() -> None:
    """
    Given: payload가 문자열/배열이고 type이 숫자인 봉투
    When: DevopsEnvelope로 검증
    Then: 예외 없이 payload는 빈 dict, type은 None
    """
    assert DevopsEnvelope.model_validate({"type": "codecommit", "payload": "x"}).payload == {}
    assert DevopsEnvelope.model_validate({"type": "codecommit", "payload": [1, 2]}).payload == {}
    assert DevopsEnvelope.model_validate({"type": 7, "payload": {}}).type is None


def test_pull_request_notification_recipients_skip_unresolved() -> None:
    """
    Given: 일부 승인자의 이메일이 해석되지 않은 알림
    When: 수신자 목록 조회
    Then: None과 빈 문자열은 제외되고, 모델은 불변
    """
    notification = PullRequestNotification(
        pullRequestId="42",
        approverIamUserNames=["alice", "bob", "carol"],
        resolvedEmails=["alice@x.com", None, ""],
    )

    assert notification.pull_request_id == "42"
    assert notification.approver_iam_user_names == ["alice", "bob", "carol"]
    assert notification.recipients == ["alice@x.com"]
    with pytest.raises(ValidationError):
        notification.pull_request_id = "43"
