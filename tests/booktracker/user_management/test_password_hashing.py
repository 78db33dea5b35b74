from booktracker.user_management import BcryptPasswordHasher


def test_hash_is_salted_and_verifiable():
    hasher = BcryptPasswordHasher(rounds=4)

    first = hasher.hash("correct horse")
    second = hasher.hash("correct horse")

    assert first != second
    assert hasher.verify("correct horse", first)
    assert hasher.verify("correct horse", second)
    assert not hasher.verify("battery staple", first)


def test_malformed_verifier_does_not_match():
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.verify("anything", "not-a-bcrypt-hash") is False


def test_long_passwords_are_accepted():
    hasher = BcryptPasswordHasher(rounds=4)
    password = "p" * 100

    assert hasher.verify(password, hasher.hash(password))


def test_dummy_verify_runs_without_a_stored_hash():
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.dummy_verify("whatever") is None
