"""
Protocol buffer messages used to wrap outgoing transactions.

The message classes are built at import time from descriptors declared
here, so no generated ``_pb2`` module is needed:

    message NonceTx  { bytes inner = 1; uint64 sequence = 2; }
    message SignedTx { bytes inner = 1; bytes signature = 2; bytes public_key = 3; }
"""
from typing import Any, Dict, List, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_FDP = descriptor_pb2.FieldDescriptorProto

PACKAGE = "dappchain"

_MESSAGES: Dict[str, List[Tuple[str, int]]] = {
    "NonceTx": [
        ("inner", _FDP.TYPE_BYTES),
        ("sequence", _FDP.TYPE_UINT64),
    ],
    "SignedTx": [
        ("inner", _FDP.TYPE_BYTES),
        ("signature", _FDP.TYPE_BYTES),
        ("public_key", _FDP.TYPE_BYTES),
    ],
}


def _build_message_classes() -> Dict[str, Any]:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = "dappchain_sdk/tx.proto"
    file_proto.package = PACKAGE
    file_proto.syntax = "proto3"

    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add()
        message_proto.name = message_name
        for number, (field_name, field_type) in enumerate(fields, start=1):
            field_proto = message_proto.field.add()
            field_proto.name = field_name
            field_proto.number = number
            field_proto.type = field_type
            field_proto.label = _FDP.LABEL_OPTIONAL

    # Private pool so the definitions never clash with the default pool
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return {
        name: message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))
        for name in _MESSAGES
    }


_classes = _build_message_classes()

NonceTx = _classes["NonceTx"]
SignedTx = _classes["SignedTx"]

__all__ = ["NonceTx", "SignedTx"]
