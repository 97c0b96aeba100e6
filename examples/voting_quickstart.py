import numpy as np, pandas as pd
from time import perf_counter
from sklearn.model_selection import train_test_split
from id3py import ID3Classifier, DatasetBuilder, cross_validate

# Synthetic roll-call votes: '+' yea, '-' nay, '.' present/abstain.
rng = np.random.RandomState(42)
n_reps, n_issues = 200, 10
votes = rng.choice(list("+-."), size=(n_reps, n_issues), p=[0.45, 0.45, 0.10])
party = np.where((votes[:, 2] == "+") ^ (rng.rand(n_reps) < 0.1), "D", "R")
df = pd.DataFrame({"id": [f"rep-{i}" for i in range(n_reps)], "party": party,
                   "votes": ["".join(row) for row in votes]})
issues = [f"Issue {chr(ord('A') + i)}" for i in range(n_issues)]

X_train, X_test, y_train, y_test = train_test_split(
    df["votes"].tolist(), df["party"].values, test_size=0.25, random_state=42, stratify=df["party"])

clf = ID3Classifier(random_state=42, feature_names=issues)
t0 = perf_counter(); clf.fit(X_train, y_train); print(f"fit: {perf_counter()-t0:.3f} s")
print(f"held-out accuracy: {clf.score(X_test, y_test):.3f}")
clf.print_tree()
try:
    clf.export_graphviz("voting_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")

builder = DatasetBuilder()
for rec in df.itertuples(index=False):
    builder.add_datum(rec.id, rec.party, rec.votes)
t0 = perf_counter(); acc = cross_validate(builder.build(), random_state=42)
print(f"leave-one-out accuracy: {acc:.3f}% ({perf_counter()-t0:.1f} s)")
