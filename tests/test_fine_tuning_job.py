import json

from gptkit.encoding import to_jsonable
from gptkit.fine_tunes import FineTuneEvent
from gptkit.fine_tuning_job import (
    FineTuningJob,
    FineTuningJobEvent,
    FineTuningJobEventList,
    FineTuningJobRequest,
    Hyperparameters,
    cancel_fine_tuning_job,
    create_fine_tuning_job,
    list_fine_tuning_job_events,
    retrieve_fine_tuning_job,
)

JOB_ID = "fine-tuning-job-id"


def sample_job():
    return FineTuningJob(
        object="fine_tuning.job",
        id=JOB_ID,
        model="davinci-002",
        created_at=1692661014,
        finished_at=1692661190,
        fine_tuned_model="ft:davinci-002:my-org:custom_suffix:7q8mpxmy",
        organization_id="org-123",
        result_files=["file-abc123"],
        status="succeeded",
        validation_file="",
        training_file="file-abc123",
        hyperparameters=Hyperparameters(epochs="auto"),
        trained_tokens=5768,
    )


def test_create_job():
    call = create_fine_tuning_job(FineTuningJobRequest())
    assert (call.method, call.url) == ("POST", "/fine_tuning/jobs")
    assert json.loads(call.body) == {"training_file": ""}


def test_create_job_with_hyperparameters():
    request = FineTuningJobRequest(
        training_file="file-abc123", hyperparameters=Hyperparameters(epochs=3), suffix="s"
    )
    assert json.loads(create_fine_tuning_job(request).body) == {
        "training_file": "file-abc123",
        "hyperparameters": {"n_epochs": 3},
        "suffix": "s",
    }


def test_cancel_and_retrieve():
    cancel = cancel_fine_tuning_job(JOB_ID)
    assert (cancel.method, cancel.url) == ("POST", "/fine_tuning/jobs/fine-tuning-job-id/cancel")
    retrieve = retrieve_fine_tuning_job(JOB_ID)
    assert (retrieve.method, retrieve.url) == ("GET", "/fine_tuning/jobs/fine-tuning-job-id")


def test_list_events_without_parameters():
    call = list_fine_tuning_job_events(JOB_ID)
    assert call.method == "GET"
    assert call.url == "/fine_tuning/jobs/fine-tuning-job-id/events"


def test_list_events_with_after():
    call = list_fine_tuning_job_events(JOB_ID, after="last-event-id")
    assert call.url == "/fine_tuning/jobs/fine-tuning-job-id/events?after=last-event-id"


def test_list_events_with_limit():
    call = list_fine_tuning_job_events(JOB_ID, limit=10)
    assert call.url == "/fine_tuning/jobs/fine-tuning-job-id/events?limit=10"


def test_list_events_with_after_and_limit():
    call = list_fine_tuning_job_events(JOB_ID, after="last-event-id", limit=10)
    assert call.url == "/fine_tuning/jobs/fine-tuning-job-id/events?after=last-event-id&limit=10"


def test_job_encoding_and_round_trip():
    encoded = to_jsonable(sample_job())
    assert encoded["hyperparameters"] == {"n_epochs": "auto"}
    assert "validation_file" not in encoded
    assert encoded["trained_tokens"] == 5768
    assert FineTuningJob.from_dict(json.loads(json.dumps(encoded))) == sample_job()


def test_empty_job_hyperparameters_encode_empty():
    assert to_jsonable(FineTuningJob())["hyperparameters"] == {}


def test_event_list_and_event_parse():
    events = FineTuningJobEventList.from_dict(
        {"object": "list", "data": [{"level": "info", "message": "m"}], "has_more": True}
    )
    assert events.data == [FineTuneEvent(level="info", message="m")]
    assert events.has_more is True
    event = FineTuningJobEvent.from_dict({"id": "ev-1", "type": "message", "data": {"step": 1}})
    assert (event.id, event.type, event.data) == ("ev-1", "message", {"step": 1})