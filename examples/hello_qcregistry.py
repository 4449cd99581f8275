import qcregistry
from qcregistry import Unauthorized


def main() -> None:
    # Attaches to QCREGISTRY_URL if set, otherwise starts a local server.
    handle = qcregistry.run(port=0)
    client = handle.client() if isinstance(handle, qcregistry.RegistryServer) else handle

    first = client.register(50, "user1")
    second = client.register(50, "user1")
    print(f"registered {first} and {second}")

    client.update_availability(first, False, "user1")
    print(client.get_record(first))

    try:
        client.update_availability(first, True, "user2")
    except Unauthorized as e:
        print(f"refused: {e.kind.value}: {e.message}")

    admin = client.get_admin()
    client.set_admin("ops", admin)
    print(f"admin is now {client.get_admin()!r}")


if __name__ == "__main__":
    main()
