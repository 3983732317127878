from gptkit.encoding import to_jsonable
from gptkit.models import (
    FineTuneModelDeleteResponse,
    Model,
    ModelsList,
    Permission,
    delete_fine_tune_model,
    get_model,
    list_models,
)
from gptkit.request_builder import ApiCall

TEST_FINE_TUNE_MODEL_ID = "fine-tune-model-id"


def test_list_models_request():
    assert list_models() == ApiCall(method="GET", url="/models", body=None, headers={})


def test_get_model_request():
    call = get_model("text-davinci-003")
    assert call.method == "GET"
    assert call.url == "/models/text-davinci-003"
    assert call.body is None


def test_delete_fine_tune_model_request():
    call = delete_fine_tune_model(TEST_FINE_TUNE_MODEL_ID)
    assert call.method == "DELETE"
    assert call.url == "/models/fine-tune-model-id"


def test_models_list_parses_data():
    listing = ModelsList.from_dict(
        {
            "data": [
                {
                    "created": 1649358449,
                    "id": "text-davinci-003",
                    "object": "model",
                    "owned_by": "openai",
                    "permission": [{"id": "perm-1", "allow_sampling": True, "group": None}],
                    "root": "text-davinci-003",
                    "parent": None,
                }
            ]
        }
    )
    assert len(listing.models) == 1
    model = listing.models[0]
    assert model.created_at == 1649358449
    assert model.owned_by == "openai"
    assert model.parent == ""
    assert model.permission == [Permission(id="perm-1", allow_sampling=True)]


def test_empty_models_list():
    assert ModelsList.from_dict({}).models == []


def test_model_round_trip_uses_wire_names():
    model = Model(created_at=5, id="m", object="model", permission=[Permission(created_at=7, is_blocking=True)])
    encoded = to_jsonable(model)
    assert encoded["created"] == 5
    assert encoded["permission"][0]["created"] == 7
    assert Model.from_dict(encoded) == model


def test_delete_response_parses():
    response = FineTuneModelDeleteResponse.from_dict({"id": "ft-1", "object": "model", "deleted": True})
    assert response == FineTuneModelDeleteResponse(id="ft-1", object="model", deleted=True)