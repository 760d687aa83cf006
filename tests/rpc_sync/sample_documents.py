CHAINLIST_DOCUMENT = r"""
import { mergeDeep } from "../utils/index.js";
import { llamaNodesRpcs } from "./llamaNodesRpcs.js";

const privacyStatement = {
  llamarpc:
    "LlamaNodes is open-source and does not track your data. You can check the code at " +
    "https://github.com/llamanodes/web3-proxy",
  publicnode: `We do not store or track any user data, see https://www.publicnode.com/privacy`,
  // trailing comma on purpose
  unitedbloc: 'UnitedBloc does not collect or store any PII information.',
};

/* The registry below is what we want.
   Everything else in this module is noise. */
export const extraRpcs = {
  1: {
    rpcs: [
      ...Object.values(llamaNodesRpcs[1]?.rpcs ?? {}),
      "https://a.example",
      {
        url: "https://b.example",
        tracking: "none",
        trackingDetails: privacyStatement.publicnode,
      },
      {
        url: "https://c.example",
        tracking: "yes",
        trackingDetails: privacyStatement.llamarpc,
      },
      {
        url: "wss://d.example",
        tracking: "none",
      },
    ],
  },
  137: {
    rpcs: ["https://x.example", "http://y.example", { tracking: "none" }],
  },
  "testnet-αβ": {
    rpcs: [{ url: `https://unicode.example/é`, tracking: "limited" }],
  },
  2020: {
    rpcs: [],
  },
  56: "not an object",
  97: { websiteDead: true },
};

const allExtraRpcs = mergeDeep(llamaNodesRpcs, extraRpcs);

export default allExtraRpcs;
"""
